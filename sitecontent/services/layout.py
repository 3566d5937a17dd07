"""Layout loading and normalisation.

Stored layouts are loosely typed: the CMS has written JSON-encoded strings,
bare component objects, arrays and NULLs over time.  Every value is first
classified into one :data:`RawLayout` variant and then normalised into the
canonical shape, a list of opaque component descriptors.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Union

from sitecontent.services.errors import LayoutNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextLayout:
    """Text that could not be decoded as JSON; kept as one opaque entry."""

    text: str


@dataclass(frozen=True)
class SequenceLayout:
    items: List[Any]


@dataclass(frozen=True)
class SingleLayout:
    item: Any


@dataclass(frozen=True)
class AbsentLayout:
    pass


RawLayout = Union[TextLayout, SequenceLayout, SingleLayout, AbsentLayout]


def decode_json_text(value: Any) -> Any:
    """Return *value* decoded from JSON when it is text, else unchanged.

    Text that is not valid JSON is returned as-is.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError as exc:
        logger.warning("Stored value is not valid JSON, keeping raw text: %s", exc)
        return value


def classify_layout(value: Any) -> RawLayout:
    if isinstance(value, str):
        if not value.strip():
            return AbsentLayout()
        try:
            value = json.loads(value)
        except ValueError as exc:
            logger.warning("Layout is not valid JSON, keeping raw text: %s", exc)
            return TextLayout(value)

    if isinstance(value, list):
        return SequenceLayout(value)
    if isinstance(value, tuple):
        return SequenceLayout(list(value))
    if isinstance(value, Mapping):
        return SingleLayout(value)
    return AbsentLayout()


def normalize_layout(value: Any) -> List[Any]:
    """Coerce a stored layout into a list of component descriptors.

    Never raises.  A list is returned unchanged; a single object or unparsable
    text becomes a one-element list; anything else becomes ``[]``.
    """
    layout = classify_layout(value)
    if isinstance(layout, SequenceLayout):
        return layout.items
    if isinstance(layout, SingleLayout):
        logger.info("Layout is a single component, wrapping it in a list")
        return [layout.item]
    if isinstance(layout, TextLayout):
        return [layout.text]
    return []


def load_layout(repository, page_id: Any) -> Any:
    """Return the stored layout payload for *page_id* without transforming it.

    Raises:
        LayoutNotFound: if the page has no ``page_layouts`` row.
    """
    row = repository.find_layout(page_id)
    if row is None:
        raise LayoutNotFound(f"No layout stored for page {page_id}.")
    return row.get("layout_json")
