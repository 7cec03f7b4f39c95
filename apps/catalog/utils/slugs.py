"""
Slug derivation shared by domains, sub-domains and projects.
"""

import re

_DISALLOWED = re.compile(r'[^\w\s-]', re.ASCII)
_SEPARATORS = re.compile(r'[\s_-]+', re.ASCII)


def generate_slug(title: str) -> str:
    """
    Derive a URL slug from a title.

    "  Embedded & IoT_Systems " -> "embedded-iot-systems"

    Returns an empty string when the title has no usable characters;
    callers decide whether that is an error.
    """
    slug = (title or '').lower().strip()
    slug = _DISALLOWED.sub('', slug)
    slug = _SEPARATORS.sub('-', slug)
    return slug.strip('-')
