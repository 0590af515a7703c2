"""
Utility modules for address parsing.
"""
from .trie import Trie, TrieNode

from .data_utils import (
    RegionDataError,
    load_regions,
    province_aliases,
)

from .region_index import RegionIndex

from .text_utils import (
    clean_address,
    strip_suffix,
    city_abbreviation,
    district_abbreviations,
    normalize_city_name,
)

from .disambiguation_utils import (
    resolve_district_flexible,
    validate_district_flexible,
)

__all__ = [
    # Matching
    'Trie',
    'TrieNode',
    # Gazetteer
    'RegionDataError',
    'load_regions',
    'province_aliases',
    'RegionIndex',
    # Text utilities
    'clean_address',
    'strip_suffix',
    'city_abbreviation',
    'district_abbreviations',
    'normalize_city_name',
    # Disambiguation
    'resolve_district_flexible',
    'validate_district_flexible',
]
