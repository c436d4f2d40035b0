"""Sanitization of untrusted CMS rich text for safe insertion into web pages."""

from .security import (
    HTMLSanitizer,
    escape_fields,
    escape_html,
    escape_html_with_breaks,
    sanitize_html,
)

__all__ = [
    "HTMLSanitizer",
    "escape_fields",
    "escape_html",
    "escape_html_with_breaks",
    "sanitize_html",
]
