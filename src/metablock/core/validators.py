"""
Reusable predicates over raw cell text.

All functions are total: they accept any string or None and return a bool
without raising. None never satisfies a rule.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

# =============================================================================
# Patterns
# =============================================================================

# Block names: small letter at start, single underscores, camelCase but
# neither PascalCase nor runs of capitals.
BLOCK_NAME_PATTERN = r"^[a-z](?!.*__+)(?!.*[A-Z][A-Z]+)[A-Za-z0-9_]+$"

# Field names: letter or underscore at start, dotted segments allowed
# (``coverage.Spectral.Bandpass``), not wrapped in underscores on both ends.
FIELD_NAME_PATTERN = r"^(?!_.*_$)[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*$"

# Collection aliases: not all digits, no trailing _ or -.
COLLECTION_ALIAS_PATTERN = r"^(?![0-9]+$)(?!.*[_-]+$)[a-zA-Z0-9_-]+$"

TRUE_LITERAL = "TRUE"
FALSE_LITERAL = "FALSE"

# Schemes accepted as URLs, and those that require a host part.
URL_SCHEMES = frozenset({"http", "https", "ftp", "file", "jar"})
_HOST_SCHEMES = frozenset({"http", "https", "ftp"})

_BLOCK_NAME_RE = re.compile(BLOCK_NAME_PATTERN)
_FIELD_NAME_RE = re.compile(FIELD_NAME_PATTERN)
_ALIAS_RE = re.compile(COLLECTION_ALIAS_PATTERN)
_UNSIGNED_INT_RE = re.compile(r"^[0-9]+$")
# RFC 3986 reserved + unreserved characters, plus percent-escapes.
_URI_CHARS_RE = re.compile(r"^(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})+$")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


# =============================================================================
# Generic text rules
# =============================================================================


def is_blank(value: str | None) -> bool:
    """True for None, the empty string and whitespace only."""
    return value is None or not value.strip()


def is_not_blank(value: str | None) -> bool:
    return not is_blank(value)


def is_empty(value: str | None) -> bool:
    return value == ""


def is_any_text(value: str | None) -> bool:
    return value is not None


def is_empty_or_not_blank(value: str | None) -> bool:
    """Empty is fine, whitespace only is not."""
    return value is not None and (value == "" or not is_blank(value))


def is_not_blank_shorter_than(value: str | None, limit: int) -> bool:
    return is_not_blank(value) and len(value) < limit  # type: ignore[arg-type]


def is_unsigned_int(value: str | None) -> bool:
    return value is not None and bool(_UNSIGNED_INT_RE.fullmatch(value))


# =============================================================================
# Dialect rules
# =============================================================================


def is_valid_block_name(value: str | None) -> bool:
    return value is not None and bool(_BLOCK_NAME_RE.fullmatch(value))


def is_valid_field_name(value: str | None) -> bool:
    return value is not None and bool(_FIELD_NAME_RE.fullmatch(value))


def is_valid_alias(value: str | None) -> bool:
    return value is not None and bool(_ALIAS_RE.fullmatch(value))


def is_strict_boolean(value: str | None) -> bool:
    """Only the literals TRUE and FALSE are booleans (case-sensitive)."""
    return value in (TRUE_LITERAL, FALSE_LITERAL)


def parse_strict_boolean(value: str) -> bool:
    """
    Convert a strict boolean literal.

    Raises:
        ValueError: If the value is not TRUE or FALSE
    """
    if value == TRUE_LITERAL:
        return True
    if value == FALSE_LITERAL:
        return False
    raise ValueError(f"'{value}' is not one of {TRUE_LITERAL}, {FALSE_LITERAL}")


def is_valid_url(value: str | None) -> bool:
    """
    Check a value is both a URL and a syntactically valid URI.

    First stage: the value has a supported scheme and, where the scheme
    needs one, a host. Second stage: every character is legal in a URI and
    percent-escapes are well formed.
    """
    if not value:
        return False
    try:
        parts = urlsplit(value)
        # accessing port validates its range
        parts.port  # noqa: B018
    except ValueError:
        return False

    scheme = parts.scheme.lower()
    if not _SCHEME_RE.fullmatch(parts.scheme) or scheme not in URL_SCHEMES:
        return False
    if scheme in _HOST_SCHEMES and not parts.hostname:
        return False
    return bool(_URI_CHARS_RE.fullmatch(value))
