class ContentNotFound(LookupError):
    """Requested content does not exist for the tenant."""


class PageNotFound(ContentNotFound):
    pass


class LayoutNotFound(ContentNotFound):
    pass
