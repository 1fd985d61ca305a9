"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed ror_hierarchy package.
"""

import pytest


ROR = "https://ror.org/"


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def registry_records():
    """Small registry: university -> school -> lab, a funder alias, a loner.

    Relationships are declared from both ends the way the registry dump
    does it.
    """
    return [
        {
            "id": ROR + "uni",
            "names": [{"value": "Example University", "types": ["ror_display"]}],
            "relationships": [
                {"type": "Child", "id": ROR + "school", "label": "School of Science"},
                {"type": "Related", "id": ROR + "hospital"},
            ],
            "external_ids": [
                {"type": "fundref", "all": ["100000001", "100000002"], "preferred": "100000001"},
                {"type": "isni", "all": ["0000 0001 2345 6789"], "preferred": None},
            ],
        },
        {
            "id": ROR + "school",
            "names": [{"value": "School of Science"}],
            "relationships": [
                {"type": "Parent", "id": ROR + "uni"},
                {"type": "Child", "id": ROR + "lab"},
            ],
            "external_ids": [
                {"type": "fundref", "all": ["100000003"]},
            ],
        },
        {
            "id": ROR + "lab",
            "relationships": [
                {"type": "Parent", "id": ROR + "school"},
            ],
        },
        {
            "id": ROR + "loner",
            "names": [{"value": "Independent Institute"}],
            "relationships": [],
            "external_ids": [
                {"type": "fundref", "all": ["100000099"], "preferred": "100000099"},
            ],
        },
    ]
