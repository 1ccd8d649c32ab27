from __future__ import annotations

import math

import pytest

from rostercheck.dataloader.coercion import (
    coerce_fields,
    coerce_int,
    coerce_int_list,
    coerce_phases,
    coerce_string_list,
    coerce_text,
    normalize_cell,
    parse_int,
)
from rostercheck.dataloader.schema_inference import EXPECTED_FIELDS


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ""),
        (math.nan, ""),
        ("  W1 ", "W1"),
        (3.0, "3"),
        (2.5, "2.5"),
        (7, "7"),
        (True, "true"),
        ([1, 2], "[1, 2]"),
    ],
)
def test_normalize_cell(raw, expected) -> None:
    assert normalize_cell(raw) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("7", 7), (" 3.0 ", 3), ("12abc", 12), ("-2", -2), ("abc", None), ("", None)],
)
def test_parse_int_reads_leading_integer(text, expected) -> None:
    assert parse_int(text) == expected


# -----------------------------
# String lists
# -----------------------------
@pytest.mark.parametrize(
    "raw, expected",
    [
        ('["coding", "testing"]', ["coding", "testing"]),
        ("coding, testing", ["coding", "testing"]),
        ("coding,,testing, ", ["coding", "testing"]),
        ("[1, 2]", ["1", "2"]),
        ("", []),
        (None, []),
        ("solo", ["solo"]),
    ],
)
def test_coerce_string_list(raw, expected) -> None:
    assert coerce_string_list(raw) == expected


# -----------------------------
# Integer lists
# -----------------------------
def test_int_list_comma_and_json_agree() -> None:
    assert coerce_int_list("1,2,3") == [1, 2, 3]
    assert coerce_int_list("[1,2,3]") == [1, 2, 3]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1, x, 3", [1, 3]),
        ('[1, "2", "x", null]', [1, 2]),
        ("[1.5, 2.0]", [1.5, 2]),
        ("nonsense", []),
        ("", []),
    ],
)
def test_coerce_int_list_drops_unparseable(raw, expected) -> None:
    assert coerce_int_list(raw) == expected


# -----------------------------
# Phase specification
# -----------------------------
def test_range_literal_is_preserved() -> None:
    assert coerce_phases("2-5") == "2-5"
    assert coerce_phases(" 2-5 ") == "2-5"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("[1,2,3]", [1, 2, 3]),
        ("1, 3", [1, 3]),
        ("4", [4]),
        (4.0, [4]),
        ("", []),
        (None, []),
    ],
)
def test_phase_lists(raw, expected) -> None:
    assert coerce_phases(raw) == expected


def test_unparseable_phases_return_raw_text() -> None:
    """
    @brief
    Unparseable input comes back verbatim so the validator can flag it.
    """
    assert coerce_phases("early") == "early"
    assert coerce_phases("2 to 5") == [2]
    assert coerce_phases("x-y") == "x-y"


# -----------------------------
# Scalars
# -----------------------------
@pytest.mark.parametrize(
    "raw, expected",
    [("3", 3), ("0", 0), ("-1", -1), ("3.0", 3), (3.0, 3), ("", 1), ("abc", 1), (None, 1)],
)
def test_coerce_int(raw, expected) -> None:
    assert coerce_int(raw) == expected


def test_coerce_text_keeps_json_verbatim() -> None:
    assert coerce_text(' {"a": 1} ') == '{"a": 1}'


def test_coerce_fields_fills_defaults_for_missing_columns() -> None:
    # --- Act ---
    values = coerce_fields(EXPECTED_FIELDS["task"], {"TaskID": "T1", "Duration": "4"})

    # --- Assert ---
    assert values == {
        "TaskID": "T1",
        "TaskName": "",
        "Category": "",
        "Duration": 4,
        "RequiredSkills": [],
        "PreferredPhases": [],
        "MaxConcurrent": 1,
    }


# -----------------------------
# Oversized integer text
# -----------------------------
HUGE = "9" * 5000  # longer than int() accepts from a string


def test_oversized_integer_cells_degrade_instead_of_raising() -> None:
    """
    @brief
    Integer text beyond the interpreter's digit limit counts as unparseable.
    """
    assert parse_int(HUGE) is None
    assert coerce_int(HUGE) == 1
    assert coerce_int_list(HUGE) == []
    assert coerce_int_list(f"1,{HUGE},2") == [1, 2]
    assert coerce_int_list("[" + HUGE + "]") == []
    assert coerce_string_list("[" + HUGE + "]") == ["[" + HUGE + "]"]
    assert coerce_phases(HUGE) == HUGE
    assert coerce_phases(f"1-{HUGE}") == f"1-{HUGE}"
