"""
Address parser - extracts province / city / district from free text.

Three tries (province, city, district) hold every canonical name plus its
abbreviations. parse() walks the text left to right:

    1. Province: longest prefix. Municipalities (北京市 ...) are their own
       city, so only a district match is attempted and the call returns.
    2. City vs district: both tries run on the same position. Without a
       province, a longer or fully-suffixed district match (朝阳区) wins over
       a shorter city match (朝阳); otherwise the city is taken when it
       belongs to the recorded province.
    3. District: validated against the known city, or used to reverse-infer
       city and province when it has exactly one owner.
    4. Municipality backfill: city := province.

Whatever is left becomes `detail`. The parser never raises for input text:
unknown segments stay None and ambiguous districts (several owners, no
context) do not guess a city.

Example:
    >>> parser = AddressParser()
    >>> parser.parse("广东省深圳市南山区科技园路1号")
    ParsedAddress(province='广东省', city='深圳市', district='南山区', detail='科技园路1号')
"""
import time
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from . import config
from .region import ParsedAddress, Region
from .utils.data_utils import load_regions, province_aliases
from .utils.disambiguation_utils import resolve_district_flexible
from .utils.region_index import RegionIndex
from .utils.text_utils import (
    city_abbreviation,
    clean_address,
    district_abbreviations,
    normalize_city_name,
    suffix_candidates,
)
from .utils.trie import Trie

logger = logging.getLogger(__name__)

Match = Optional[Tuple[str, str, int]]


class AddressParser:
    """
    Province/city/district parser over a static gazetteer.

    Tries and index are built once in __init__ and never mutated, so one
    instance can serve concurrent parse() calls from many threads.
    """

    def __init__(
        self,
        regions: Optional[Iterable[Region]] = None,
        data_path: Optional[Union[str, Path]] = None
    ):
        """
        Args:
            regions: Region records (default: loaded from data_path)
            data_path: Gazetteer CSV (default: bundled pca.csv)

        Raises:
            RegionDataError: gazetteer could not be loaded
        """
        start_time = time.time()

        if regions is None:
            regions = load_regions(data_path)

        self.index = RegionIndex().build(regions)
        self.province_aliases = province_aliases()

        self.province_trie = self._build_province_trie()
        self.city_trie = self._build_city_trie()
        self.district_trie = self._build_district_trie()

        elapsed = (time.time() - start_time) * 1000
        logger.info(f"Address parser ready in {elapsed:.1f}ms")
        logger.info(
            f"  Trie keys: province={len(self.province_trie)}, "
            f"city={len(self.city_trie)}, district={len(self.district_trie)}"
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _build_province_trie(self) -> Trie:
        trie = Trie()
        for short, full in sorted(self.province_aliases.items()):
            if full in self.index.provinces:
                trie.insert(short, full)
        for province in sorted(self.index.provinces):
            trie.insert(province, province)
        return trie

    def _build_city_trie(self) -> Trie:
        # Abbreviations first: a canonical name always maps to itself
        trie = Trie()
        cities = sorted(self.index.cities)
        for city in cities:
            short = city_abbreviation(city)
            if short:
                trie.insert(short, city)
        for city in cities:
            trie.insert(city, city)
        return trie

    def _build_district_trie(self) -> Trie:
        trie = Trie()
        districts = sorted(self.index.districts)
        for district in districts:
            for short in district_abbreviations(district):
                if len(short) >= config.MIN_DISTRICT_ABBREVIATION_LENGTH:
                    trie.insert(short, district)
        for district in districts:
            trie.insert(district, district)
        return trie

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, address: str) -> ParsedAddress:
        """
        Parse an address string.

        Args:
            address: Raw address text

        Returns:
            ParsedAddress; fields that could not be resolved are None

        Example:
            >>> parser.parse("北京朝阳区")
            ParsedAddress(province='北京市', city='北京市', district='朝阳区', detail='')
        """
        address = clean_address(address)
        if not address:
            return ParsedAddress()

        trace = config.DEBUG_MATCHING
        province = city = district = None
        remaining = address

        # Step 1: province
        province_match = self.province_trie.find_longest_prefix(remaining)
        if province_match:
            matched, province, length = province_match
            remaining = remaining[length:]
            if trace:
                logger.debug(f"[PARSE] province '{matched}' -> {province}")

            if self.index.is_municipality(province):
                return self._parse_municipality(province, remaining)

        # Step 2: city, unless a district reading is clearly better
        city_match = self.city_trie.find_longest_prefix(remaining)
        district_match = self.district_trie.find_longest_prefix(remaining)

        if self._prefer_district(province, city_match, district_match):
            matched, district, length = district_match
            remaining = remaining[length:]

            owners = self.index.district_to_city.get(district, [])
            if len(owners) == 1:
                province, city = owners[0]
            if trace:
                logger.debug(f"[PARSE] district first '{matched}' -> {district} ({len(owners)} owner(s))")

        elif city_match:
            matched, candidate, length = city_match
            city_province = self.index.city_to_province.get(candidate)

            if province is None or city_province == province:
                city = candidate
                remaining = remaining[length:]
                if province is None:
                    province = city_province
                if trace:
                    logger.debug(f"[PARSE] city '{matched}' -> {city} ({province})")
            elif trace:
                logger.debug(f"[PARSE] city '{matched}' rejected: belongs to {city_province}, not {province}")

        # Step 3: district
        if district is None:
            district_match = self.district_trie.find_longest_prefix(remaining)
            if district_match:
                matched, candidate, length = district_match

                if city is not None:
                    resolved = self._resolve_district(city, matched, candidate)
                else:
                    resolved = candidate

                if resolved:
                    district = resolved
                    remaining = remaining[length:]

                    if city is None:
                        owners = self.index.district_to_city.get(district, [])
                        if len(owners) == 1:
                            province, city = owners[0]
                        elif province is not None:
                            city = next(
                                (owner_city for owner_province, owner_city in owners
                                 if owner_province == province),
                                None
                            )

                    if province is None and city is not None:
                        province = self.index.city_to_province.get(city)

                    if trace:
                        logger.debug(f"[PARSE] district '{matched}' -> {district} ({province}/{city})")
                elif trace:
                    logger.debug(f"[PARSE] district '{matched}' rejected for {city}")

        # Step 4: municipality named only by its province
        if province is not None and city is None and self.index.is_municipality(province):
            city = province

        return ParsedAddress(province, city, district, remaining.strip())

    def _parse_municipality(self, province: str, remaining: str) -> ParsedAddress:
        """Municipality shortcut: city is the province, only a district may follow."""
        district = None

        district_match = self.district_trie.find_longest_prefix(remaining)
        if district_match:
            matched, candidate, length = district_match
            district = self._resolve_municipality_district(province, matched, candidate)
            if district:
                remaining = remaining[length:]
            elif config.DEBUG_MATCHING:
                logger.debug(f"[PARSE] district '{matched}' rejected for {province}")

        return ParsedAddress(province, province, district, remaining.strip())

    def _resolve_municipality_district(self, province: str, matched: str, candidate: str) -> Optional[str]:
        """
        Municipality district for a district-trie hit, or None.

        Only the canonical name or a registered abbreviation of one of the
        municipality's own districts is accepted: "朝阳" -> 朝阳区 for 北京市,
        while "朝阳县" is rejected.
        """
        if self.index.validate_district(province, candidate):
            return candidate
        for district in sorted(self.index.city_districts.get(province, ())):
            if matched in district_abbreviations(district):
                return district
        return None

    @staticmethod
    def _prefer_district(province: Optional[str], city_match: Match, district_match: Match) -> bool:
        """
        Whether a district match should be taken before any city match.

        Only without province context: the district span is longer, or its
        canonical name carries a full district suffix, or no city matched.
        """
        if province is not None or district_match is None:
            return False
        if city_match is None:
            return True

        _, district, district_len = district_match
        _, _, city_len = city_match
        return district_len > city_len or district.endswith(config.FULL_DISTRICT_SUFFIXES)

    def _resolve_district(self, city: str, matched: str, candidate: str) -> Optional[str]:
        """
        Canonical district of `city` for a district-trie hit, or None.

        Exact membership first, then the flexible prefix heuristic.
        """
        if self.index.validate_district(city, candidate):
            return candidate
        return resolve_district_flexible(self.index.city_districts.get(city, ()), matched)

    def parse_batch(self, addresses: Iterable[str]) -> List[ParsedAddress]:
        """
        Parse multiple addresses. Order is preserved; elements are independent.
        """
        return [self.parse(address) for address in addresses]

    def is_valid_address(self, address: str) -> bool:
        """True when at least province or city could be resolved."""
        result = self.parse(address)
        return result.has_province() or result.has_city()

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def _normalize_province(self, province: str) -> str:
        if province in self.province_aliases:
            return self.province_aliases[province]
        if province in self.index.provinces:
            return province
        with_suffix = f"{province}{config.PROVINCE_SUFFIX}"
        if with_suffix in self.index.provinces:
            return with_suffix
        return province

    def _normalize_city(self, city: str) -> str:
        if city in self.index.cities:
            return city
        with_suffix = f"{city}{config.CITY_SUFFIX}"
        if with_suffix in self.index.cities:
            return with_suffix
        return city

    def _normalize_district(self, district: str) -> str:
        if district in self.index.districts:
            return district
        for candidate in suffix_candidates(district, config.NORMALIZE_DISTRICT_SUFFIXES):
            if candidate in self.index.districts:
                return candidate
        return district

    def normalize(self, province: str, city: str, district: Optional[str] = None) -> str:
        """
        Expand abbreviated names and join them.

        Unlike ParsedAddress.full_address(), a municipality's repeated
        province/city is kept.

        Example:
            >>> parser.normalize("广东", "深圳", "南山")
            '广东省深圳市南山区'
            >>> parser.normalize("北京", "北京", "朝阳")
            '北京市北京市朝阳区'
        """
        result = self._normalize_province(province) + self._normalize_city(city)
        if district is not None:
            result += self._normalize_district(district)
        return result

    # ------------------------------------------------------------------
    # Gazetteer accessors
    # ------------------------------------------------------------------

    def provinces(self) -> Set[str]:
        return set(self.index.provinces)

    def cities_of_province(self, province: str) -> Set[str]:
        """Cities of a province; short names ("广东") are accepted."""
        norm_province = self._normalize_province(province)
        return set(self.index.province_cities.get(norm_province, ()))

    def districts_of_city(self, city: str) -> Set[str]:
        """Districts of a city; "深圳" is read as "深圳市"."""
        norm_city = city if city in self.index.cities else normalize_city_name(city)
        return set(self.index.city_districts.get(norm_city, ()))

    def get_stats(self):
        return {
            **self.index.get_stats(),
            'province_keys': len(self.province_trie),
            'city_trie_keys': len(self.city_trie),
            'district_trie_keys': len(self.district_trie),
        }


# Process-wide shared instance (lazy initialization)
_GLOBAL_PARSER: Optional[AddressParser] = None
_GLOBAL_LOCK = threading.Lock()


def get_parser() -> AddressParser:
    """
    Get the shared parser instance. Built on first call.

    Example:
        >>> get_parser().parse("深圳南山")
        ParsedAddress(province='广东省', city='深圳市', district='南山区', detail='')
    """
    global _GLOBAL_PARSER

    if _GLOBAL_PARSER is None:
        with _GLOBAL_LOCK:
            if _GLOBAL_PARSER is None:
                _GLOBAL_PARSER = AddressParser()

    return _GLOBAL_PARSER


def reset_parser():
    """Drop the shared instance; the next get_parser() rebuilds it."""
    global _GLOBAL_PARSER

    with _GLOBAL_LOCK:
        _GLOBAL_PARSER = None


def parse(address: str) -> ParsedAddress:
    """Parse with the shared parser."""
    return get_parser().parse(address)


def normalize(province: str, city: str, district: Optional[str] = None) -> str:
    """Normalize with the shared parser."""
    return get_parser().normalize(province, city, district)
