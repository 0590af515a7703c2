#!/usr/bin/env python3
"""
Test script for the administrative index.
Covers reverse lookups, abbreviated keys and same-named districts.
"""
import pytest

from cpca.region import Region
from cpca.utils.region_index import RegionIndex
from cpca.utils.disambiguation_utils import resolve_district_flexible, validate_district_flexible
from cpca.utils.text_utils import district_abbreviations, normalize_city_name


REGIONS = [
    Region("北京市", "北京市", "朝阳区"),
    Region("北京市", "北京市", "海淀区"),
    Region("吉林省", "长春市", "朝阳区"),
    Region("辽宁省", "朝阳市", "朝阳县"),
    Region("广东省", "深圳市", "南山区"),
    Region("广东省", "东莞市", None),
    Region("内蒙古自治区", "呼和浩特市", "土默特左旗"),
]


@pytest.fixture
def index():
    return RegionIndex().build(REGIONS)


def test_entity_sets(index):
    print("=" * 60)
    print("TEST: entity sets")
    print("=" * 60)

    assert index.provinces == {"北京市", "吉林省", "辽宁省", "广东省", "内蒙古自治区"}
    assert "东莞市" in index.cities
    assert index.province_cities["广东省"] == {"深圳市", "东莞市"}
    assert "东莞市" not in index.city_districts
    assert index.districts == {"朝阳区", "海淀区", "朝阳县", "南山区", "土默特左旗"}


def test_city_to_province_includes_abbreviations(index):
    assert index.find_province_by_city("深圳市") == "广东省"
    assert index.find_province_by_city("深圳") == "广东省"
    assert index.find_province_by_city("东莞") == "广东省"
    assert index.find_province_by_city("广州") is None


def test_district_owners(index):
    """Same-named districts keep every owner, in record order."""
    owners = index.find_cities_by_district("朝阳区")
    print(f"  朝阳区 -> {owners}")
    assert owners == [("北京市", "北京市"), ("吉林省", "长春市")]

    # "朝阳" is the abbreviation of both 朝阳区 and 朝阳县
    assert index.find_cities_by_district("朝阳") == [
        ("北京市", "北京市"),
        ("吉林省", "长春市"),
        ("辽宁省", "朝阳市"),
    ]

    assert index.find_cities_by_district("土默特左") == [("内蒙古自治区", "呼和浩特市")]
    assert index.find_cities_by_district("不存在区") == []


def test_find_cities_by_district_returns_copy(index):
    owners = index.find_cities_by_district("南山区")
    owners.append(("x", "y"))
    assert index.find_cities_by_district("南山区") == [("广东省", "深圳市")]


def test_validate_district_is_exact(index):
    assert index.validate_district("深圳市", "南山区")
    assert index.validate_district("北京市", "朝阳区")
    assert not index.validate_district("北京市", "朝阳")
    assert not index.validate_district("朝阳市", "朝阳区")
    assert not index.validate_district("东莞市", "南山区")


def test_predicates():
    assert RegionIndex.is_municipality("上海市")
    assert not RegionIndex.is_municipality("上海")
    assert not RegionIndex.is_municipality("广东省")
    assert RegionIndex.is_no_district_city("中山市")
    assert not RegionIndex.is_no_district_city("深圳市")


def test_unbuilt_index_raises():
    with pytest.raises(RuntimeError):
        RegionIndex().validate_district("深圳市", "南山区")


def test_rebuild_is_ignored(index):
    index.build([Region("上海市", "上海市", "徐汇区")])
    assert "上海市" not in index.provinces
    assert index.get_stats()['built'] is True


def test_stats(index):
    stats = index.get_stats()
    assert stats['provinces'] == 5
    assert stats['cities'] == 6
    assert stats['districts'] == 5


def test_text_helpers():
    assert district_abbreviations("朝阳区") == ("朝阳",)
    assert district_abbreviations("北票市") == ("北票",)
    assert district_abbreviations("土默特左旗") == ("土默特左",)
    assert district_abbreviations("区") == ()
    assert normalize_city_name("深圳") == "深圳市"
    assert normalize_city_name("大理白族自治州") == "大理白族自治州"
    assert normalize_city_name("锡林郭勒盟") == "锡林郭勒盟"


def test_flexible_district_resolution():
    districts = {"东城区", "朝阳区", "海淀区"}

    assert resolve_district_flexible(districts, "朝阳") == "朝阳区"
    assert resolve_district_flexible(districts, "朝阳县") == "朝阳区"
    assert resolve_district_flexible(districts, "海淀区") == "海淀区"
    assert resolve_district_flexible(districts, "南山") is None
    assert resolve_district_flexible(districts, "") is None
    assert resolve_district_flexible((), "朝阳") is None

    assert validate_district_flexible(districts, "东城")
    assert not validate_district_flexible(districts, "长安")
