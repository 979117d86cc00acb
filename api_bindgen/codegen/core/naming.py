"""
Naming utilities for safe code generation.

Turns raw schema names ("will-navigate", "request.url", "`options`") into
declaration identifiers. The normalizer is a pure function of its
replacement table; the default tables below are built once at import time
and never mutated.
"""

import re
from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING

from .kinds import Kind

if TYPE_CHECKING:
    from .schema import Base


# Characters treated as word separators
SEPARATOR_CHARS: Tuple[str, ...] = (
    "`",
    '"',
    ".",
    "_",
    "-",
    " ",
    "\t",
    "(",
    ")",
)

# Case-sensitive substring corrections applied before title-casing
ACRONYM_CORRECTIONS: Tuple[Tuple[str, str], ...] = (
    ("url", "URL"),
    ("Url", "URL"),
)

MODULE_SUFFIX = "Module"

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^\w]", re.UNICODE)


def title_word(word: str) -> str:
    """Upper-case the first character of a word, keep the rest as is."""
    return word[:1].upper() + word[1:]


def strip_suffix(symbol: str, suffix: str) -> str:
    """Remove one trailing suffix, leaving the symbol intact otherwise."""
    if suffix and symbol.endswith(suffix) and symbol != suffix:
        return symbol[: -len(suffix)]
    return symbol


@dataclass(frozen=True)
class SymbolNormalizer:
    """Maps raw schema names to identifiers."""

    separators: Tuple[str, ...] = SEPARATOR_CHARS
    corrections: Tuple[Tuple[str, str], ...] = ACRONYM_CORRECTIONS
    module_suffix: str = MODULE_SUFFIX
    empty_name: str = "Obj"
    digit_prefix: str = "X"

    def _replace(self, name: str) -> str:
        """
        Single left-to-right pass over the name.

        At each position the first matching separator or correction wins,
        so a replacement never feeds into another one.
        """
        rules = [(sep, " ") for sep in self.separators] + list(self.corrections)
        out = []
        i = 0
        while i < len(name):
            for old, new in rules:
                if old and name.startswith(old, i):
                    out.append(new)
                    i += len(old)
                    break
            else:
                out.append(name[i])
                i += 1
        return "".join(out)

    def symbol(self, name: str) -> str:
        """
        Normalize a raw name into an identifier.

        Examples:
            "background-color" -> "BackgroundColor"
            "request.url"      -> "RequestURL"
        """
        replaced = self._replace(name)
        joined = "".join(title_word(word) for word in replaced.split())
        cleaned = _INVALID_IDENTIFIER_CHARS.sub("", joined)

        if not cleaned:
            return self.empty_name
        if cleaned[0].isdigit():
            return f"{self.digit_prefix}{cleaned}"
        return cleaned

    def base_symbol(self, base: "Base") -> str:
        """Display name of an entity; modules get the module suffix."""
        name = self.symbol(base.name)
        if base.kind is Kind.MODULE:
            return name + self.module_suffix
        return name

    def stem(self, base: "Base") -> str:
        """Display name of an entity with any module suffix removed."""
        return strip_suffix(self.base_symbol(base), self.module_suffix)


DEFAULT_NORMALIZER = SymbolNormalizer()


def normalize(name: str) -> str:
    """Normalize with the default tables."""
    return DEFAULT_NORMALIZER.symbol(name)
