"""
Administrative index over the gazetteer.

Multi-directional lookups built in one pass over the region records:
    province -> cities, city -> province, city -> districts,
    district -> [(province, city), ...]

City and district abbreviations ("深圳", "南山") are indexed alongside the
canonical names. A district key can have several owners across the
country ("朝阳区": 北京市 and 长春市); the list keeps them all so callers
can decide whether context disambiguates.

Example:
    >>> index = RegionIndex()
    >>> index.build(load_regions())
    >>> index.find_province_by_city("深圳")
    '广东省'
    >>> index.find_cities_by_district("朝阳区")
    [('北京市', '北京市'), ('吉林省', '长春市')]
"""
import time
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..config import MUNICIPALITIES, NO_DISTRICT_CITIES
from ..region import Region
from .text_utils import city_abbreviation, district_abbreviations

logger = logging.getLogger(__name__)


class RegionIndex:
    """
    Read-only after build(); safe to share across threads.
    """

    def __init__(self):
        """Initialize empty index."""
        self.provinces: Set[str] = set()
        self.cities: Set[str] = set()
        self.districts: Set[str] = set()

        # province -> {city}
        self.province_cities: Dict[str, Set[str]] = defaultdict(set)
        # city (canonical and abbreviated) -> province
        self.city_to_province: Dict[str, str] = {}
        # city -> {district}
        self.city_districts: Dict[str, Set[str]] = defaultdict(set)
        # district (canonical and abbreviated) -> [(province, city)]
        self.district_to_city: Dict[str, List[Tuple[str, str]]] = defaultdict(list)

        self._built = False

    def build(self, regions: Iterable[Region]) -> 'RegionIndex':
        """
        Build all lookups from region records. Call this once.

        Args:
            regions: Deduplicated Region records

        Returns:
            self
        """
        if self._built:
            logger.warning("Region index already built, skipping rebuild")
            return self

        start_time = time.time()

        for region in regions:
            province, city, district = region.province, region.city, region.district

            self.provinces.add(province)
            self.province_cities[province].add(city)

            self.cities.add(city)
            self.city_to_province[city] = province
            short_city = city_abbreviation(city)
            if short_city:
                self.city_to_province[short_city] = province

            if district is None:
                continue

            self.districts.add(district)
            self.city_districts[city].add(district)
            self.district_to_city[district].append((province, city))
            for short in district_abbreviations(district):
                self.district_to_city[short].append((province, city))

        # Freeze the defaultdicts so lookups never create keys
        self.province_cities = dict(self.province_cities)
        self.city_districts = dict(self.city_districts)
        self.district_to_city = dict(self.district_to_city)

        self._built = True

        elapsed = (time.time() - start_time) * 1000
        stats = self.get_stats()
        logger.info(f"Region index built in {elapsed:.1f}ms")
        logger.info(f"  Provinces: {stats['provinces']}")
        logger.info(f"  Cities: {stats['cities']}")
        logger.info(f"  Districts: {stats['districts']} ({stats['district_keys']} lookup keys)")

        return self

    def _check_built(self):
        if not self._built:
            raise RuntimeError("Index not built. Call build() first.")

    @staticmethod
    def is_municipality(province: str) -> bool:
        """北京市/上海市/天津市/重庆市."""
        return province in MUNICIPALITIES

    @staticmethod
    def is_no_district_city(city: str) -> bool:
        """Prefecture-level city without districts (东莞市, 中山市, ...)."""
        return city in NO_DISTRICT_CITIES

    def validate_district(self, city: str, district: str) -> bool:
        """True iff district is a canonical district registered under city."""
        self._check_built()
        return district in self.city_districts.get(city, ())

    def find_province_by_city(self, city: str) -> Optional[str]:
        self._check_built()
        return self.city_to_province.get(city)

    def find_cities_by_district(self, district: str) -> List[Tuple[str, str]]:
        """
        All (province, city) owners of a district name or abbreviation.
        More than one entry means the name is ambiguous without context.
        """
        self._check_built()
        return list(self.district_to_city.get(district, ()))

    def get_stats(self) -> Dict:
        """Get index statistics."""
        return {
            'built': self._built,
            'provinces': len(self.provinces),
            'cities': len(self.cities),
            'districts': len(self.districts),
            'city_keys': len(self.city_to_province),
            'district_keys': len(self.district_to_city),
        }
