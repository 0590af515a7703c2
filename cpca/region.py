"""
Region records and parse results.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Region:
    """
    One gazetteer row: province / city / optional district.

    district is None for cities without county-level subdivision
    (e.g. 东莞市, 中山市).
    """
    province: str
    city: str
    district: Optional[str] = None

    def full_name(self) -> str:
        """
        Example:
            >>> Region('广东省', '深圳市', '南山区').full_name()
            '广东省深圳市南山区'
        """
        return f"{self.province}{self.city}{self.district or ''}"


@dataclass(frozen=True)
class ParsedAddress:
    """Result of AddressParser.parse()."""
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    detail: str = ''

    def has_province(self) -> bool:
        return self.province is not None

    def has_city(self) -> bool:
        return self.city is not None

    def has_district(self) -> bool:
        return self.district is not None

    def is_complete(self) -> bool:
        """True when province, city and district were all resolved."""
        return self.has_province() and self.has_city() and self.has_district()

    def match_level(self) -> int:
        return sum([self.has_province(), self.has_city(), self.has_district()])

    def full_address(self) -> str:
        """
        Standardized display string.

        A municipality's city equals its province and is written once:
            >>> ParsedAddress('北京市', '北京市', '朝阳区', '望京').full_address()
            '北京市朝阳区望京'
        """
        parts = []
        if self.province:
            parts.append(self.province)
        if self.city and self.city != self.province:
            parts.append(self.city)
        if self.district:
            parts.append(self.district)
        if self.detail:
            parts.append(self.detail)
        return ''.join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
