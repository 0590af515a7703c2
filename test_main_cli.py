#!/usr/bin/env python3
"""
Test script for the command line interface.
"""
import json

import pandas as pd
import pytest

from cpca.main import main, process_batch


def test_single_address_json(capsys):
    print("=" * 60)
    print("TEST: cpca -a ... --json")
    print("=" * 60)
    capsys.readouterr()

    main(['-a', "北京朝阳区望京", '--json'])

    result = json.loads(capsys.readouterr().out)
    assert result['final_output']['province'] == "北京市"
    assert result['final_output']['district'] == "朝阳区"
    assert result['final_output']['detail'] == "望京"


def test_single_address_text(capsys):
    main(['-a', "深圳南山科技园"])

    out = capsys.readouterr().out
    assert "广东省" in out
    assert "南山区" in out
    assert "full_address" in out


def test_normalize_option(capsys):
    main(['-n', "广东", "深圳", "南山"])
    assert capsys.readouterr().out.strip() == "广东省深圳市南山区"

    main(['--normalize', "浙江", "杭州"])
    assert capsys.readouterr().out.strip() == "浙江省杭州市"


def test_normalize_option_arity():
    with pytest.raises(SystemExit):
        main(['-n', "广东"])


def test_missing_arguments():
    with pytest.raises(SystemExit):
        main([])


def test_batch_csv(tmp_path):
    input_file = tmp_path / "input.csv"
    output_file = tmp_path / "out" / "results.csv"
    pd.DataFrame({
        'id': ["1", "2", "3"],
        'address': ["广东省深圳市南山区科技园路1号", "朝阳区", "某某路123号"],
    }).to_csv(input_file, index=False)

    main(['-i', str(input_file), '-o', str(output_file)])

    output = pd.read_csv(output_file, dtype=str, keep_default_na=False, encoding='utf-8-sig')
    assert list(output.columns) == ['id', 'address', 'province', 'city', 'district', 'detail', 'quality_flag']
    assert list(output['id']) == ["1", "2", "3"]
    assert list(output['quality_flag']) == ['full_address', 'district_only', 'no_match']
    assert output.loc[0, 'district'] == "南山区"
    assert output.loc[1, 'province'] == ""


def test_batch_custom_column(tmp_path):
    input_file = tmp_path / "input.csv"
    pd.DataFrame({'addr': ["深圳南山", "杭州市西湖区"]}).to_csv(input_file, index=False)

    output = process_batch(str(input_file), column='addr')

    assert list(output['city']) == ["深圳市", "杭州市"]


def test_batch_unknown_column(tmp_path):
    input_file = tmp_path / "input.csv"
    pd.DataFrame({'address': ["深圳南山"]}).to_csv(input_file, index=False)

    with pytest.raises(SystemExit):
        process_batch(str(input_file), column='missing')


def test_batch_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        process_batch(str(tmp_path / "missing.csv"))
