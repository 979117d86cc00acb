"""
Entity kinds and the type classifier.

Every schema node carries a raw ``type`` tag. The classifier folds that tag
into one of a closed set of kinds the emitter dispatches on.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import RawType


class Kind(Enum):
    """Closed set of entity kinds."""

    MODULE = "Module"
    CLASS = "Class"
    STRUCTURE = "Structure"
    OBJECT = "Object"
    FUNCTION = "Function"
    BASIC = "Basic"


# Tags that name a kind; anything else is basic.
_NAMED_KINDS = {
    kind.value: kind for kind in Kind if kind is not Kind.BASIC
}


def classify_tag(tag: str | None) -> Kind:
    """Classify an already resolved type tag."""
    if tag is None:
        return Kind.BASIC
    return _NAMED_KINDS.get(tag, Kind.BASIC)


def classify(raw_type: "RawType") -> Kind:
    """
    Classify a raw type.

    Absent and malformed types are basic. A union (list) is classified by its
    first member only.
    """
    return classify_tag(raw_type.tag)
