"""HTML sanitization module for XSS prevention."""

from collections import Counter
from functools import lru_cache
import logging
from typing import Optional

from cms_sanitizer.config import get_max_depth
from cms_sanitizer.logging_config import log_sanitization_event

from .escaper import escape_html
from .policy import (
    VOID_TAGS,
    allowed_attributes_for,
    is_allowed_tag,
    is_dangerous_value,
    is_event_handler,
    is_safe_href,
    is_safe_src,
)
from .tree import Element, Text, iter_elements, parse_html, text_content

logger = logging.getLogger(__name__)


def attribute_rejection_reason(name: str, value: str, allowed: frozenset) -> Optional[str]:
    """Return why an attribute must be dropped, or ``None`` to keep it.

    Checks run in a fixed order: handler names first, regardless of the
    allow-list, then the allow-list, then the value checks.
    """
    if is_event_handler(name):
        return "event_handler"
    if name not in allowed:
        return "not_allowed"
    if is_dangerous_value(value):
        return "dangerous_value"
    if name == "href" and not is_safe_href(value):
        return "unsafe_href"
    if name == "src" and not is_safe_src(value):
        return "unsafe_src"
    return None


class HTMLSanitizer:
    """Rewrites untrusted CMS rich text into a safe subset of HTML.

    Instances hold configuration only; every ``sanitize`` call builds its own
    tree and log, so one instance can be shared freely.
    """

    def __init__(self, max_depth: Optional[int] = None):
        if max_depth is None:
            max_depth = get_max_depth()
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth

    def sanitize(self, html_content: Optional[str]) -> tuple[str, list[dict]]:
        """
        Sanitize HTML content and return sanitized HTML with sanitization log.

        Never raises for bad input: if parsing or rewriting fails, the whole
        input is returned as escaped plain text.

        Args:
            html_content: Raw HTML content to sanitize

        Returns:
            tuple of (sanitized_html, sanitization_log)
        """
        sanitization_log: list[dict] = []
        if not html_content:
            return "", sanitization_log

        html_content = str(html_content)
        try:
            root = parse_html(html_content)
            sanitized = self._rewrite(root, sanitization_log)
        except Exception as exc:
            logger.error(f"Sanitization failed, falling back to escaped text: {exc}", exc_info=True)
            log_sanitization_event(
                "fallback_to_text",
                {"input_length": len(html_content), "error_type": type(exc).__name__},
                level=logging.WARNING,
            )
            return escape_html(html_content), [
                {
                    "type": "fallback_to_text",
                    "message": "Content could not be parsed safely and was escaped as plain text",
                }
            ]

        if sanitization_log:
            counts = Counter(entry["type"] for entry in sanitization_log)
            log_sanitization_event(
                "content_sanitized", {"input_length": len(html_content), **counts}
            )

        return sanitized, sanitization_log

    def _rewrite(self, root: Element, sanitization_log: list[dict]) -> str:
        """Walk the tree in document order and emit sanitized markup."""
        output = []
        depth_limit_logged = False

        # Items are (node, depth) pairs or pending closing tags as plain strings
        stack = [(child, 1) for child in reversed(root.children)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                output.append(item)
                continue

            node, depth = item
            if isinstance(node, Text):
                output.append(escape_html(node.content))
                continue

            if not is_allowed_tag(node.tag):
                sanitization_log.append(
                    {
                        "type": "tag_stripped",
                        "tag": node.tag,
                        "message": f"Stripped disallowed tag <{node.tag}>, kept its text",
                    }
                )
                output.append(escape_html(text_content(node)))
                continue

            if depth > self.max_depth:
                if not depth_limit_logged:
                    sanitization_log.append(
                        {
                            "type": "depth_limit_exceeded",
                            "tag": node.tag,
                            "message": f"Nesting deeper than {self.max_depth} levels flattened to text",
                        }
                    )
                    depth_limit_logged = True
                output.append(escape_html(text_content(node)))
                continue

            output.append(self._opening_tag(node, sanitization_log))
            if node.tag in VOID_TAGS:
                continue

            stack.append(f"</{node.tag}>")
            stack.extend((child, depth + 1) for child in reversed(node.children))

        return "".join(output)

    def _opening_tag(self, element: Element, sanitization_log: list[dict]) -> str:
        """Build an opening tag keeping only attributes that pass every check."""
        allowed = allowed_attributes_for(element.tag)
        parts = [f"<{element.tag}"]

        for name, value in element.attributes:
            name = name.lower()
            reason = attribute_rejection_reason(name, value, allowed)
            if reason:
                sanitization_log.append(
                    {
                        "type": "attribute_removed",
                        "tag": element.tag,
                        "attribute": name,
                        "reason": reason,
                        "message": f"Removed {name} attribute from <{element.tag}> ({reason})",
                    }
                )
                continue
            parts.append(f' {escape_html(name)}="{escape_html(value)}"')

        parts.append(">")
        return "".join(parts)

    def extract_external_resources(self, html_content: str) -> list[dict[str, str]]:
        """Extract list of external resources referenced in sanitized HTML."""
        resources = []
        if not html_content:
            return resources

        for element in iter_elements(parse_html(html_content)):
            if element.tag == "img":
                resource_type, url_attribute = "image", "src"
            elif element.tag == "a":
                resource_type, url_attribute = "link", "href"
            else:
                continue

            for name, value in element.attributes:
                url = value.strip()
                if name == url_attribute and url.lower().startswith(("http://", "https://")):
                    resources.append({"type": resource_type, "url": url})

        return resources


@lru_cache()
def get_default_sanitizer() -> HTMLSanitizer:
    """Get the shared sanitizer configured from the environment."""
    return HTMLSanitizer()


def sanitize_html(html: Optional[str]) -> str:
    """Sanitize rich CMS content for insertion into a page.

    Allowed formatting tags survive with their safe attributes; any other
    tag is replaced by its escaped text.
    """
    sanitized, _ = get_default_sanitizer().sanitize(html)
    return sanitized
