"""Tests for funder id mapping and identifier resolution."""

import logging

import pytest

from ror_hierarchy.kernel.funders import (
    FunderMap,
    build_funder_map,
    funder_aliases,
    resolve_identifier,
)
from ror_hierarchy.kernel.records import ExternalId, parse_records

ROR = "https://ror.org/"


def test_build_funder_map(registry_records):
    funders = build_funder_map(parse_records(registry_records))

    assert funders.to_dict() == {
        "100000001": ROR + "uni",
        "100000002": ROR + "uni",
        "100000003": ROR + "school",
        "100000099": ROR + "loner",
    }
    assert funders.collisions == 0


def test_non_fundref_ids_ignored(registry_records):
    funders = build_funder_map(parse_records(registry_records))

    assert "0000 0001 2345 6789" not in funders


def test_fundref_type_match_is_exact():
    funders = build_funder_map(parse_records([
        {"id": "A", "external_ids": [{"type": "FundRef", "all": ["1"]}]},
    ]))

    assert len(funders) == 0


def test_funder_aliases_include_preferred_once():
    entry = ExternalId(type="fundref", all=["1", "2", "1"], preferred="2")
    assert funder_aliases(entry) == ["1", "2"]


def test_funder_aliases_preferred_only():
    entry = ExternalId(type="fundref", all=None, preferred="7")
    assert funder_aliases(entry) == ["7"]


def test_record_without_id_registers_nothing():
    funders = build_funder_map(parse_records([
        {"external_ids": [{"type": "fundref", "all": ["1"]}]},
    ]))

    assert len(funders) == 0


def test_last_write_wins_on_collision(caplog):
    """A later record claiming the same alias takes it over."""
    records = parse_records([
        {"id": ROR + "first", "external_ids": [{"type": "fundref", "all": ["500"]}]},
        {"id": ROR + "second", "external_ids": [{"type": "fundref", "all": ["500"]}]},
    ])

    with caplog.at_level(logging.WARNING, logger="ror_hierarchy.kernel.funders"):
        funders = build_funder_map(records)

    assert funders.get("500") == ROR + "second"
    assert funders.collisions == 1
    assert "500" in caplog.text


def test_same_record_repeating_alias_is_not_a_collision():
    funders = build_funder_map(parse_records([
        {"id": "A", "external_ids": [
            {"type": "fundref", "all": ["1"]},
            {"type": "fundref", "all": ["1"], "preferred": "1"},
        ]},
    ]))

    assert funders.get("1") == "A"
    assert funders.collisions == 0


def test_resolve_canonical_passes_through():
    funders = FunderMap({"1000": ROR + "x"})

    # Not checked against the mapping or the registry
    assert resolve_identifier(ROR + "anything", funders, ROR) == ROR + "anything"


def test_resolve_alias():
    funders = FunderMap({"1000": ROR + "x"})

    assert resolve_identifier("1000", funders, ROR) == ROR + "x"


def test_resolve_unknown_alias_returns_none():
    funders = FunderMap({"1000": ROR + "x"})

    assert resolve_identifier("9999", funders, ROR) is None
    assert resolve_identifier("http://ror.org/x", funders, ROR) is None


def test_resolve_with_custom_prefix():
    funders = FunderMap()

    assert resolve_identifier("org:X", funders, "org:") == "org:X"
    assert resolve_identifier(ROR + "x", funders, "org:") is None


def test_from_dict_rejects_bad_shape():
    with pytest.raises(ValueError):
        FunderMap.from_dict(["1000"])
    with pytest.raises(ValueError):
        FunderMap.from_dict({"1000": 42})
