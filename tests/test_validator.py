from types import MappingProxyType

import pytest

from validator import parse_level_key, validate_levels


def test_parse_level_key():
    assert parse_level_key(3) == 3
    assert parse_level_key("3") == 3
    assert parse_level_key(" 12 ") == 12
    assert parse_level_key("-1") == -1
    for bad in ("abc", "1.5", "", None, True, 2.0):
        with pytest.raises(ValueError):
            parse_level_key(bad)


def test_valid_table():
    valid, errors = validate_levels({
        "1": {"exp_required": 0, "benefits": {"max_members": 10}},
        "2": {"exp_required": 1000},
        "3": {"exp_required": 1000, "benefits": None},
    })
    assert valid is True
    assert errors == []


def test_non_mapping_input():
    valid, errors = validate_levels(["1", "2"])
    assert valid is False
    assert "expected a mapping" in errors[0]


def test_collects_all_errors():
    valid, errors = validate_levels({
        "one": {"exp_required": 0},
        "0": {"exp_required": 0},
        "2": {"exp_required": -1},
        "3": {"benefits": {"max_members": 1}},
    })
    assert valid is False
    assert len(errors) == 4
    assert any("'one'" in e for e in errors)
    assert any(e.startswith("levels.0:") for e in errors)
    assert any(e.startswith("levels.2.exp_required:") for e in errors)
    assert any(e.startswith("levels.3:") and "exp_required" in e for e in errors)


def test_benefit_value_type_reported_with_path():
    valid, errors = validate_levels({"1": {"exp_required": 0, "benefits": {"income_bonus": "5"}}})
    assert valid is False
    assert errors[0].startswith("levels.1.benefits.income_bonus:")


def test_duplicate_level_keys():
    valid, errors = validate_levels({1: {"exp_required": 0}, "1": {"exp_required": 0}})
    assert valid is False
    assert any("duplicate" in e for e in errors)


def test_decreasing_thresholds_rejected():
    valid, errors = validate_levels({
        1: {"exp_required": 0},
        2: {"exp_required": 300},
        4: {"exp_required": 200},
    })
    assert valid is False
    assert errors == ["levels.4: exp_required 200 is lower than level 2 (300)"]


def test_equal_thresholds_allowed():
    valid, _ = validate_levels({1: {"exp_required": 0}, 2: {"exp_required": 0}})
    assert valid is True


def test_non_string_benefit_name():
    valid, errors = validate_levels({1: {"exp_required": 0, "benefits": {7: 1}}})
    assert valid is False
    assert any("benefit name 7" in e for e in errors)


def test_mapping_entries_count_as_objects():
    valid, errors = validate_levels({
        1: MappingProxyType({"exp_required": 0, "benefits": MappingProxyType({"max_members": 4})}),
    })
    assert valid is True
    assert errors == []

    valid, errors = validate_levels({1: MappingProxyType({"exp_required": 0, "benefits": {"a": "x"}})})
    assert valid is False
    assert errors[0].startswith("levels.1.benefits.a:")
