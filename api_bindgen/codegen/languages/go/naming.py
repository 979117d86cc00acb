"""
Go-specific naming utilities.

Handles Go reserved words and package naming rules.
"""

from ...core.naming import ACRONYM_CORRECTIONS, MODULE_SUFFIX, SymbolNormalizer


# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}


def create_go_normalizer(
    extra_corrections=None, module_suffix: str = MODULE_SUFFIX
) -> SymbolNormalizer:
    """
    Create a symbol normalizer configured for Go.

    Generated identifiers are PascalCase so they are exported and never clash
    with the lower-case reserved words.

    Args:
        extra_corrections: Additional (substring, replacement) pairs applied
            after the default acronym corrections
        module_suffix: Suffix appended to module-kind block names
    """
    corrections = ACRONYM_CORRECTIONS + tuple(
        tuple(pair) for pair in (extra_corrections or ())
    )
    return SymbolNormalizer(corrections=corrections, module_suffix=module_suffix)


def validate_go_package_name(name: str) -> list[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    # Check basic identifier rules
    if not name.isidentifier():
        errors.append(f"'{name}' is not a valid Go identifier")

    # Go-specific rules
    if name[0].isupper():
        errors.append("Package names should be lowercase")

    if "_" in name:
        errors.append("Package names should not contain underscores")

    if name.lower() in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
