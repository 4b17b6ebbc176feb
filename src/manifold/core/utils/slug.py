"""Route-derived page ids and project directory slugs"""

import re
from typing import Iterable


HOME_PAGE_ID = "home"
DEFAULT_SLUG = "new-project"
DEFAULT_SITE_URL = "https://example.com"

_ID_INVALID_RE = re.compile(r'[^A-Za-z0-9_-]')
_SLUG_SPACE_RE = re.compile(r'[\s_]', re.ASCII)
_SLUG_INVALID_RE = re.compile(r'[^a-z0-9-]')
_HYPHENS_RE = re.compile(r'-+')


def canonical_page_id(route: str) -> str:
    """Flatten a route into a single lowercase token, e.g. '/About/Team' -> 'aboutteam'."""
    trimmed = route.strip()
    if not trimmed or trimmed == '/':
        return HOME_PAGE_ID
    joined = ''.join(seg for seg in trimmed.lstrip('/').split('/') if seg)
    token = _ID_INVALID_RE.sub('-', joined).lower().replace('_', '-')
    return _HYPHENS_RE.sub('-', token).strip('-') or HOME_PAGE_ID


def resolve_collisions(routes: Iterable[str]) -> list[str]:
    """Return one unique id per route in order; repeats get -2, -3, ... suffixes."""
    used: set[str] = set()
    ids = []
    for route in routes:
        base = canonical_page_id(route)
        candidate, counter = base, 2
        while candidate in used:
            candidate = f"{base}-{counter}"
            counter += 1
        used.add(candidate)
        ids.append(candidate)
    return ids


def normalize_slug(raw: str) -> str:
    """Directory-safe project slug. May be empty when nothing usable remains."""
    slug = raw.strip().lower() or DEFAULT_SLUG
    slug = _SLUG_SPACE_RE.sub('-', slug)
    slug = _SLUG_INVALID_RE.sub('', slug)
    return _HYPHENS_RE.sub('-', slug).strip('-')


def normalize_site_url(raw: str) -> str:
    trimmed = raw.strip()
    if not trimmed:
        return DEFAULT_SITE_URL
    if trimmed.startswith(('http://', 'https://')):
        return trimmed
    return f"https://{trimmed}"
