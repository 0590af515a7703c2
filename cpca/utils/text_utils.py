"""
Text processing utilities for administrative names.
"""
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from ..config import CITY_SUFFIX, DISTRICT_SUFFIXES


# City-level names that already carry a type suffix
CITY_LEVEL_SUFFIXES = ('市', '自治州', '地区', '盟')


def clean_address(text: Optional[str]) -> str:
    """
    Strip leading/trailing whitespace (full-width spaces included).

    Example:
        >>> clean_address("  广东省深圳市　")
        '广东省深圳市'
    """
    if not text:
        return ''
    return text.strip()


def strip_suffix(name: str, suffix: str) -> str:
    """
    Remove every trailing repetition of suffix.

    Example:
        >>> strip_suffix("南山区", "区")
        '南山'
    """
    if not suffix:
        return name
    while name.endswith(suffix):
        name = name[:-len(suffix)]
    return name


def city_abbreviation(city: str) -> Optional[str]:
    """
    "深圳市" -> "深圳". None when city has no 市 suffix or nothing is left.
    """
    if not city.endswith(CITY_SUFFIX):
        return None
    short = strip_suffix(city, CITY_SUFFIX)
    return short or None


@lru_cache(maxsize=10000)
def district_abbreviations(district: str, suffixes: Tuple[str, ...] = DISTRICT_SUFFIXES) -> Tuple[str, ...]:
    """
    Suffix-stripped variants of a district name, one per matching suffix.

    Example:
        >>> district_abbreviations("朝阳区")
        ('朝阳',)
        >>> district_abbreviations("忠县")
        ('忠',)
    """
    variants = []
    for suffix in suffixes:
        if district.endswith(suffix):
            short = strip_suffix(district, suffix)
            if short:
                variants.append(short)
    return tuple(variants)


def normalize_city_name(city: str) -> str:
    """
    Complete a bare city name with 市.

    Example:
        >>> normalize_city_name("深圳")
        '深圳市'
        >>> normalize_city_name("甘孜藏族自治州")
        '甘孜藏族自治州'
    """
    if city.endswith(CITY_LEVEL_SUFFIXES):
        return city
    return f"{city}{CITY_SUFFIX}"


def suffix_candidates(name: str, suffixes: Iterable[str]) -> List[str]:
    """name followed by each suffix, in order."""
    return [f"{name}{suffix}" for suffix in suffixes]
