"""Allow-lists and value checks used by the HTML sanitizer.

All tables are immutable and built once at import time.
"""

import re

ALLOWED_TAGS = frozenset(
    [
        # Typography
        "p",
        "br",
        "b",
        "i",
        "em",
        "strong",
        "u",
        "sub",
        "sup",
        "small",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        # Lists
        "ul",
        "ol",
        "li",
        # Quotes and code
        "blockquote",
        "pre",
        "code",
        # Containers
        "span",
        "div",
        # Links and media
        "a",
        "img",
        # Tables
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
    ]
)

ALLOWED_ATTRIBUTES = {
    "*": frozenset(["class"]),
    "a": frozenset(["href", "title", "target", "rel"]),
    "img": frozenset(["src", "alt", "width", "height", "style"]),
    "td": frozenset(["colspan", "rowspan"]),
    "th": frozenset(["colspan", "rowspan"]),
    "span": frozenset(["class", "style"]),
    "div": frozenset(["class", "style"]),
    "p": frozenset(["class", "style"]),
}

VOID_TAGS = frozenset(["br", "hr", "img"])

# Script-executing schemes anywhere in the value, or inline handler text such as "onload="
DANGEROUS_PATTERN = re.compile(r"javascript:|data:|vbscript:|on\w+\s*=", re.IGNORECASE)

BLOCKED_HREF_SCHEMES = ("javascript:", "data:", "vbscript:")

ALLOWED_SRC_PREFIXES = ("http://", "https://", "/", "./", "../")

_ATTRIBUTES_BY_TAG = {
    tag: ALLOWED_ATTRIBUTES.get(tag, frozenset()) | ALLOWED_ATTRIBUTES["*"]
    for tag in ALLOWED_TAGS
}

# Browsers strip leading/trailing C0 controls and spaces, and drop tab/CR/LF anywhere.
_URL_EDGE_CHARS = "".join(chr(code) for code in range(0x21))
_URL_EMBEDDED_CHARS = re.compile(r"[\t\r\n]")


def is_allowed_tag(tag: str) -> bool:
    """Check whether a tag may be emitted as markup."""
    return tag.lower() in ALLOWED_TAGS


def is_event_handler(name: str) -> bool:
    """Check for inline event handler attribute names (onclick, ONLOAD, ...)."""
    return name.lower().startswith("on")


def allowed_attributes_for(tag: str) -> frozenset:
    """Get the attribute names allowed on a tag, wildcard set included."""
    return _ATTRIBUTES_BY_TAG.get(tag.lower(), ALLOWED_ATTRIBUTES["*"])


def normalize_url(value: str) -> str:
    """Reduce a URL attribute value to the form a browser resolves its scheme from."""
    value = value.strip().strip(_URL_EDGE_CHARS)
    return _URL_EMBEDDED_CHARS.sub("", value).lower()


def is_dangerous_value(value: str) -> bool:
    """Check an attribute value against the dangerous pattern.

    The normalized form is checked too so that ``java\\tscript:`` is caught.
    """
    return bool(DANGEROUS_PATTERN.search(value) or DANGEROUS_PATTERN.search(normalize_url(value)))


def is_safe_href(value: str) -> bool:
    """Check that an href does not use a script-executing scheme."""
    return not normalize_url(value).startswith(BLOCKED_HREF_SCHEMES)


def is_safe_src(value: str) -> bool:
    """Check that a src is absolute http(s) or a relative path."""
    return normalize_url(value).startswith(ALLOWED_SRC_PREFIXES)
