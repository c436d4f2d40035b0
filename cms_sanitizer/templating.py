"""Jinja2 integration for rendering CMS content.

Templates apply the sanitizer as filters::

    {{ article.body|sanitize_html }}
    {{ settings.contact_address|nl2br }}

Every filter returns ``Markup`` so autoescaping does not escape the
result a second time.
"""

from typing import Optional

from jinja2 import BaseLoader, Environment
from markupsafe import Markup

from cms_sanitizer.security.escaper import escape_html, escape_html_with_breaks
from cms_sanitizer.security.sanitizer import sanitize_html


def sanitize_html_filter(value) -> Markup:
    return Markup(sanitize_html(value))


def escape_html_filter(value) -> Markup:
    return Markup(escape_html(value))


def nl2br_filter(value) -> Markup:
    return Markup(escape_html_with_breaks(value))


FILTERS = {
    "sanitize_html": sanitize_html_filter,
    "escape_html": escape_html_filter,
    "nl2br": nl2br_filter,
}


def register_filters(env: Environment) -> Environment:
    """Install the sanitizer filters on an existing environment."""
    env.filters.update(FILTERS)
    return env


def create_environment(loader: Optional[BaseLoader] = None) -> Environment:
    """Create an autoescaping environment with the sanitizer filters installed.

    Args:
        loader: Optional template loader, e.g. ``FileSystemLoader("templates")``

    Returns:
        Configured Jinja2 environment
    """
    env = Environment(loader=loader, autoescape=True)
    return register_filters(env)
