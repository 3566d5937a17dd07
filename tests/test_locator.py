"""Tests for page lookup, home-page dispatch and tenant isolation."""

from sitecontent.services.locator import locate_page
from sitecontent.services.tenant import TenantScope

T1 = TenantScope("t1")
T2 = TenantScope("t2")


class TestLocatePage:
    def test_slug_lookup(self, repository):
        repository.add_page(1, page_name="About Us", slug="about")
        page = locate_page(repository, "about", T1, "Homepage")
        assert page is not None
        assert page.id == 1

    def test_unknown_slug_returns_none(self, repository):
        assert locate_page(repository, "missing-slug", T1, "Homepage") is None

    def test_home_uses_reserved_name(self, repository):
        repository.add_page(1, page_name="Old Home", slug="home")
        repository.add_page(2, page_name="Homepage", slug="/")
        page = locate_page(repository, "home", T1, "Homepage")
        assert page.id == 2
        assert repository.calls == [("by_name", "t1", "Homepage")]

    def test_home_without_reserved_page_does_not_match_slug(self, repository):
        repository.add_page(1, page_name="Old Home", slug="home")
        assert locate_page(repository, "home", T1, "Homepage") is None

    def test_custom_reserved_name(self, repository):
        repository.add_page(5, page_name="GOSG Homepage", slug="/gosghome")
        assert locate_page(repository, "home", T1, "GOSG Homepage").id == 5

    def test_home_fallback_slug(self, repository):
        repository.add_page(3, page_name="Landing", slug="/gosghome")
        page = locate_page(repository, "home", T1, "Homepage", home_fallback_slug="/gosghome")
        assert page.id == 3

    def test_fallback_slug_unused_when_reserved_page_exists(self, repository):
        repository.add_page(3, page_name="Landing", slug="/gosghome")
        repository.add_page(4, page_name="Homepage", slug="/")
        page = locate_page(repository, "home", T1, "Homepage", home_fallback_slug="/gosghome")
        assert page.id == 4


class TestTenantIsolation:
    def test_same_slug_resolves_per_tenant(self, repository):
        repository.add_page(1, tenant_id="t1", page_name="About A", slug="about")
        repository.add_page(2, tenant_id="t2", page_name="About B", slug="about")
        assert locate_page(repository, "about", T1, "Homepage").id == 1
        assert locate_page(repository, "about", T2, "Homepage").id == 2

    def test_other_tenant_page_is_never_returned(self, repository):
        repository.add_page(2, tenant_id="t2", page_name="Homepage", slug="contact")
        assert locate_page(repository, "contact", T1, "Homepage") is None
        assert locate_page(repository, "home", T1, "Homepage") is None
