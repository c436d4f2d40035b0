"""Plain-text escaping for content that must never be read as markup."""

from typing import Any, Dict, Iterable

# Order matters: "&" first so the entities produced below are not escaped again.
_ENTITY_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(text: Any) -> str:
    """Escape HTML special characters in plain text.

    Use this for text-only fields (names, titles, addresses) and for every
    text node and attribute value the sanitizer emits.

    Args:
        text: Value to escape. ``None`` and empty values yield ``""``;
            anything else is converted with ``str()`` first.

    Returns:
        The escaped string
    """
    if not text:
        return ""

    escaped = str(text)
    for char, entity in _ENTITY_REPLACEMENTS:
        escaped = escaped.replace(char, entity)
    return escaped


def escape_html_with_breaks(text: Any) -> str:
    """Escape plain text and turn newlines into ``<br>`` tags.

    Escaping runs before the newline replacement so the inserted tags are
    never escaped and user input can never produce markup of its own.
    """
    if not text:
        return ""
    return escape_html(text).replace("\n", "<br>")


def escape_fields(data: Dict[str, Any], exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Escape every value of a user-submitted record.

    Args:
        data: Mapping of field name to raw value
        exclude: Field names to copy through untouched (timestamps, ids
            generated server side)

    Returns:
        A new dict with the same keys and escaped values
    """
    skipped = set(exclude)
    return {
        key: value if key in skipped else escape_html(value) for key, value in data.items()
    }
