"""Security module for HTML sanitization and XSS prevention."""

from .escaper import escape_fields, escape_html, escape_html_with_breaks
from .sanitizer import HTMLSanitizer, sanitize_html

__all__ = [
    "HTMLSanitizer",
    "escape_fields",
    "escape_html",
    "escape_html_with_breaks",
    "sanitize_html",
]
