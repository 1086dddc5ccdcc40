from __future__ import annotations

import pytest

from backend.domain.bond_form import BondForm, BondFormValidationError, build_bond_record


def form_payload() -> dict:
    return {
        "assignment_id": 17,
        "principal": "3000000",
        "interest1": {
            "start_date": "2023-05-01",
            "end_date": "2024-05-01",
            "rate": "12",
            "dynamic_end": False,
        },
        "interest2": {
            "start_date": "2024-05-02",
            "rate": 15,
            "dynamic_end": True,
        },
        "expenses": [{"item": "filing fee", "amount": 48000}],
    }


def test_form_becomes_bond_row():
    record = build_bond_record(BondForm.model_validate(form_payload()))

    assert record["assignment_id"] == 17
    assert record["principal"] == 3_000_000
    assert record["interest_1_rate"] == 12
    assert record["interest_1_start_date"].startswith("2023-05-01")
    assert record["interest_1_end_date"].startswith("2024-05-01")
    assert record["interest_2_end_date"] == "dynamic"
    assert record["interest_2_rate"] == 15
    assert record["expenses"] == [{"item": "filing fee", "amount": 48000}]


def test_dynamic_flag_overrides_a_stale_end_date():
    payload = form_payload()
    payload["interest1"]["dynamic_end"] = True
    record = build_bond_record(BondForm.model_validate(payload))
    assert record["interest_1_end_date"] == "dynamic"


def test_blank_second_period_is_stored_as_nulls():
    payload = form_payload()
    payload["interest2"] = {}
    record = build_bond_record(BondForm.model_validate(payload))
    assert record["interest_2_start_date"] is None
    assert record["interest_2_end_date"] is None
    assert record["interest_2_rate"] is None


def test_all_problems_are_reported_together():
    payload = form_payload()
    payload["principal"] = ""
    payload["interest1"]["end_date"] = "2022-01-01"
    payload["expenses"] = [{"item": " ", "amount": 100}, {"item": "stamp", "amount": 0}]

    with pytest.raises(BondFormValidationError) as excinfo:
        build_bond_record(BondForm.model_validate(payload))

    errors = excinfo.value.errors
    assert "principal is required" in errors
    assert any("before its start date" in message for message in errors)
    assert sum("expense" in message for message in errors) == 2


def test_negative_or_non_numeric_principal_is_rejected():
    for principal, message in (("-5", "principal must not be negative"), ("lots", "principal must be a number")):
        payload = form_payload()
        payload["principal"] = principal
        with pytest.raises(BondFormValidationError) as excinfo:
            build_bond_record(BondForm.model_validate(payload))
        assert message in excinfo.value.errors
