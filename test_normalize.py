#!/usr/bin/env python3
"""
Test script for name normalization.
"""
import pytest

import cpca
from cpca.parser import AddressParser
from cpca.utils.data_utils import load_regions


@pytest.fixture(scope="module")
def parser():
    return AddressParser()


def test_normalize_cases(parser):
    print("=" * 60)
    print("TEST: normalize()")
    print("=" * 60)

    test_cases = [
        (("广东", "深圳", "南山"), "广东省深圳市南山区"),
        (("广东省", "深圳市", "南山区"), "广东省深圳市南山区"),
        (("浙江", "杭州", None), "浙江省杭州市"),
        (("湖南", "长沙", "长沙"), "湖南省长沙市长沙县"),
        (("内蒙古", "呼和浩特", "土默特左旗"), "内蒙古自治区呼和浩特市土默特左旗"),
        (("四川", "甘孜藏族自治州", "康定"), "四川省甘孜藏族自治州康定市"),
    ]

    for args, expected in test_cases:
        result = parser.normalize(*args)
        print(f"  normalize{args} => '{result}'")
        assert result == expected


def test_municipality_name_is_not_collapsed(parser):
    """normalize() keeps the repeated name; full_address() collapses it."""
    assert parser.normalize("北京", "北京", "朝阳") == "北京市北京市朝阳区"
    assert parser.parse("北京朝阳区").full_address() == "北京市朝阳区"


def test_unknown_names_are_kept(parser):
    assert parser.normalize("火星", "基地", "一号") == "火星基地一号"
    assert parser.normalize("广东", "火星", None) == "广东省火星"


def test_canonical_input_is_idempotent(parser):
    for region in load_regions():
        expected = region.province + region.city + (region.district or "")
        assert parser.normalize(region.province, region.city, region.district) == expected


def test_module_level_normalize():
    assert cpca.normalize("广东", "深圳", "南山") == "广东省深圳市南山区"
