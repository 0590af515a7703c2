"""
Disambiguation utilities for abbreviated district names.

The flexible check is a best-effort heuristic, not a membership test: it
accepts a matched district token for a city when the token and one of the
city's districts overlap by prefix once the district suffix is removed.
It absorbs short forms like "朝阳" whose trie value may point at another
city's same-named district (朝阳县 vs 朝阳区).
"""
from typing import Iterable, Optional

from ..config import DISTRICT_SUFFIXES

_SUFFIX_CHARS = ''.join(DISTRICT_SUFFIXES)


def resolve_district_flexible(city_districts: Iterable[str], matched: str) -> Optional[str]:
    """
    Find the city's own district that a matched token most likely refers to.

    Args:
        city_districts: Canonical districts registered under the city
        matched: Text consumed by the district trie ("朝阳", "南山区", ...)

    Returns:
        Canonical district name, or None

    Example:
        >>> resolve_district_flexible({'南关区', '朝阳区'}, '朝阳')
        '朝阳区'
        >>> resolve_district_flexible({'南关区', '朝阳区'}, '朝阳县')
        '朝阳区'
    """
    if not matched:
        return None

    for district in sorted(city_districts):
        short = district.rstrip(_SUFFIX_CHARS)
        if district.startswith(matched) or (short and matched.startswith(short)):
            return district

    return None


def validate_district_flexible(city_districts: Iterable[str], matched: str) -> bool:
    """Predicate form of resolve_district_flexible()."""
    return resolve_district_flexible(city_districts, matched) is not None
