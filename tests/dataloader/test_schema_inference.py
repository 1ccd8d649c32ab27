from __future__ import annotations

import logging

import pytest

from rostercheck.dataloader.schema_inference import (
    EXPECTED_FIELDS,
    build_header_mapping,
    detect_entity_type,
    normalize_header,
    sanitize_mapping,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ClientID", "clientid"),
        ("Client ID", "clientid"),
        ("client_id", "clientid"),
        ("  Max-Load Per_Phase ", "maxloadperphase"),
        (None, ""),
        (7, "7"),
    ],
)
def test_normalize_header(raw, expected) -> None:
    assert normalize_header(raw) == expected


# -----------------------------
# detect_entity_type
# -----------------------------
@pytest.mark.parametrize(
    "headers, expected",
    [
        (["ClientID", "PriorityLevel"], "client"),
        (["Worker ID", "Skills"], "worker"),
        (["task_id", "Duration"], "task"),
        (["Duration"], "task"),
        (["AvailableSlots"], "worker"),
    ],
)
def test_detect_entity_type(headers, expected) -> None:
    assert detect_entity_type(headers) == expected


def test_detect_prefers_earliest_entity_on_mixed_headers() -> None:
    """
    @brief
    Headers matching several entities resolve client → worker → task.
    """
    assert detect_entity_type(["TaskID", "WorkerID", "ClientID"]) == "client"
    assert detect_entity_type(["TaskID", "Skills"]) == "worker"


def test_detect_falls_back_to_default() -> None:
    # --- Act & Assert ---
    assert detect_entity_type([]) == "client"
    assert detect_entity_type(["foo", "bar"]) == "client"
    assert detect_entity_type(["foo"], default="task") == "task"


def test_detect_is_deterministic() -> None:
    headers = ["Skills", "RequiredSkills", "id"]
    assert {detect_entity_type(headers) for _ in range(10)} == {"worker"}


@pytest.mark.parametrize(
    "headers, expected",
    [
        (["TaskID", "Duration", "WorkerName"], "task"),
        (["TaskID", "ClientName", "Duration"], "task"),
        (["TaskName", "Category", "PreferredPhases"], "task"),
        (["WorkerID", "QualificationLevel", "GroupTag"], "worker"),
        (["ClientName", "GroupTag", "AttributesJSON"], "client"),
        (["WorkerName", "QualificationLevel"], "client"),
    ],
)
def test_descriptive_columns_do_not_decide_entity(headers, expected) -> None:
    """
    @brief
    Name, group, attribute, qualification and category headers are ignored
    by detection; a task table naming its worker or client stays a task table.
    """
    assert detect_entity_type(headers) == expected


# -----------------------------
# build_header_mapping
# -----------------------------
def test_exact_mapping_tolerates_case_and_separators() -> None:
    # --- Arrange ---
    headers = ["client id", "CLIENT_NAME", "Priority-Level", "RequestedTaskIDs", "extra"]

    # --- Act ---
    mapping = build_header_mapping(headers, "client")

    # --- Assert ---
    assert mapping == {
        "ClientID": "client id",
        "ClientName": "CLIENT_NAME",
        "PriorityLevel": "Priority-Level",
        "RequestedTaskIDs": "RequestedTaskIDs",
    }


def test_first_matching_header_wins() -> None:
    mapping = build_header_mapping(["TaskID", "task_id"], "task")
    assert mapping["TaskID"] == "TaskID"


def test_synonyms_fill_unmapped_fields() -> None:
    # --- Arrange ---
    headers = ["id", "name", "slots", "Max Load", "skills"]

    # --- Act ---
    mapping = build_header_mapping(headers, "worker")

    # --- Assert ---
    assert mapping == {
        "WorkerID": "id",
        "WorkerName": "name",
        "Skills": "skills",
        "AvailableSlots": "slots",
        "MaxLoadPerPhase": "Max Load",
    }
    assert list(mapping) == [f for f in EXPECTED_FIELDS["worker"] if f in mapping]


def test_synonyms_can_be_disabled() -> None:
    mapping = build_header_mapping(["id", "priority"], "client", use_synonyms=False)
    assert mapping == {}


def test_exact_match_takes_precedence_over_synonym() -> None:
    mapping = build_header_mapping(["id", "TaskID", "skills"], "task")
    assert mapping["TaskID"] == "TaskID"
    assert mapping["RequiredSkills"] == "skills"


def test_unmapped_fields_are_logged(caplog) -> None:
    # --- Act ---
    with caplog.at_level(logging.WARNING, logger="rostercheck.dataloader.schema_inference"):
        build_header_mapping(["TaskID"], "task")

    # --- Assert ---
    assert "Unmapped task fields" in caplog.text
    assert "Duration" in caplog.text


def test_empty_headers_yield_empty_mapping() -> None:
    assert build_header_mapping([], "client") == {}
    assert build_header_mapping(["", None], "client") == {}


# -----------------------------
# sanitize_mapping
# -----------------------------
def test_sanitize_mapping_drops_unknown_and_empty_targets() -> None:
    # --- Arrange ---
    supplied = {
        "ClientID": "Customer Ref",
        "ClientName": None,
        "PriorityLevel": "",
        "Bogus": "x",
        "WorkerID": "Worker",
        "GroupTag": 3,
    }

    # --- Act ---
    cleaned = sanitize_mapping(supplied, "client")

    # --- Assert ---
    assert cleaned == {"ClientID": "Customer Ref"}


def test_sanitize_mapping_trims_targets() -> None:
    cleaned = sanitize_mapping({"ClientID": " Client ID ", "PriorityLevel": "   "}, "client")

    assert cleaned == {"ClientID": "Client ID"}
