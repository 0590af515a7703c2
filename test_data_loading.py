#!/usr/bin/env python3
"""
Test script for gazetteer loading.
"""
import pytest

from cpca import AddressParser, RegionDataError, load_regions
from cpca.config import MUNICIPALITIES, NO_DISTRICT_CITIES
from cpca.region import Region
from cpca.utils.data_utils import province_aliases


def write_csv(path, content):
    path.write_text(content, encoding='utf-8')
    return path


def test_bundled_gazetteer():
    """Bundled table covers municipalities and no-district cities."""
    print("=" * 60)
    print("TEST: bundled pca.csv")
    print("=" * 60)

    regions = load_regions()
    print(f"  Loaded {len(regions)} records")

    assert regions[0] == Region("北京市", "北京市", "东城区")
    assert len(regions) == len(set(regions))

    provinces = {r.province for r in regions}
    assert MUNICIPALITIES <= provinces

    no_district = {r.city for r in regions if r.district is None}
    assert NO_DISTRICT_CITIES <= no_district


def test_load_custom_file(tmp_path):
    csv_path = write_csv(tmp_path / "regions.csv", (
        "province,city,district\n"
        "广东省,深圳市,南山区\n"
        "广东省,深圳市,南山区\n"
        "广东省,东莞市,\n"
        ",深圳市,福田区\n"
        " 广东省 , 深圳市 , 福田区 \n"
    ))

    regions = load_regions(csv_path)

    assert regions == (
        Region("广东省", "深圳市", "南山区"),
        Region("广东省", "东莞市", None),
        Region("广东省", "深圳市", "福田区"),
    )


def test_extra_columns_and_bom(tmp_path):
    csv_path = tmp_path / "regions_bom.csv"
    csv_path.write_text(
        "province,city,district,code\n浙江省,杭州市,西湖区,330106\n",
        encoding='utf-8-sig'
    )

    assert load_regions(str(csv_path)) == (Region("浙江省", "杭州市", "西湖区"),)


def test_missing_file(tmp_path):
    with pytest.raises(RegionDataError, match="not found"):
        load_regions(tmp_path / "missing.csv")


def test_missing_columns(tmp_path):
    csv_path = write_csv(tmp_path / "bad_header.csv", "name,parent\n南山区,深圳市\n")

    with pytest.raises(RegionDataError, match="missing column"):
        load_regions(csv_path)


def test_no_usable_rows(tmp_path):
    csv_path = write_csv(tmp_path / "empty.csv", "province,city,district\n")

    with pytest.raises(RegionDataError, match="No usable"):
        load_regions(csv_path)


def test_not_utf8(tmp_path):
    csv_path = tmp_path / "gbk.csv"
    csv_path.write_bytes("province,city,district\n广东省,深圳市,南山区\n".encode('gbk'))

    with pytest.raises(RegionDataError):
        load_regions(csv_path)


def test_parser_from_custom_file(tmp_path):
    csv_path = write_csv(tmp_path / "small.csv", (
        "province,city,district\n"
        "广东省,深圳市,南山区\n"
        "广东省,深圳市,福田区\n"
    ))

    parser = AddressParser(data_path=csv_path)

    assert parser.provinces() == {"广东省"}
    result = parser.parse("广东深圳福田中心区")
    assert (result.province, result.city, result.district) == ("广东省", "深圳市", "福田区")

    # Aliases whose target is not in the data are not matched
    assert parser.parse("北京朝阳区").province is None


def test_parser_from_regions():
    parser = AddressParser(regions=[Region("上海市", "上海市", "徐汇区")])
    result = parser.parse("上海徐汇区漕河泾")

    assert (result.province, result.city, result.district) == ("上海市", "上海市", "徐汇区")
    assert result.detail == "漕河泾"


def test_province_aliases_is_a_copy():
    aliases = province_aliases()
    assert aliases["内蒙古"] == "内蒙古自治区"

    aliases["内蒙古"] = "x"
    assert province_aliases()["内蒙古"] == "内蒙古自治区"
