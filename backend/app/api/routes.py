"""HTTP routes for the Flask API."""

import logging
from datetime import datetime
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.formatting import format_amount, format_period_date, format_rate
from backend.core.ping import SERVICE_NAME, get_ping_message, get_service_version
from backend.core.recovery import summarize_assignments
from backend.core.valuation import utc_now, value_bond
from backend.domain.bond_form import BondForm, BondFormValidationError, build_bond_record
from backend.models import BondRow
from backend.schemas.assignments import SummaryRequest
from backend.schemas.ping import PingResponse
from backend.schemas.valuation import (
    BatchValuationRequest,
    BatchValuationResponse,
    ValuationDisplay,
    ValuationRequest,
    ValuationResponse,
)
from backend.settings import Settings

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _settings() -> Settings:
    return current_app.config["BOND_LEDGER_SETTINGS"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BondFormValidationError)
def _handle_form_error(exc: BondFormValidationError):
    logger.warning("bond form rejected: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _valuation_response(bond: Optional[BondRow], now: datetime) -> ValuationResponse:
    unit = _settings().currency_unit
    valuation = value_bond(bond, now)
    row = bond or BondRow()
    display = ValuationDisplay(
        principal=format_amount(valuation.principal, unit),
        interest1=format_amount(valuation.interest1, unit),
        interest2=format_amount(valuation.interest2, unit),
        expenses=format_amount(valuation.expenses, unit),
        totalOwed=format_amount(valuation.totalOwed, unit),
        period1=f"{format_period_date(row.interest_1_start_date, now)} ~ {format_period_date(row.interest_1_end_date, now)}",
        period2=f"{format_period_date(row.interest_2_start_date, now)} ~ {format_period_date(row.interest_2_end_date, now)}",
        rate1=format_rate(row.interest_1_rate),
        rate2=format_rate(row.interest_2_rate),
    )
    return ValuationResponse(**valuation.model_dump(), display=display)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(
        message=get_ping_message(),
        service=SERVICE_NAME,
        version=get_service_version(),
    )
    return jsonify(response.model_dump())


@api_bp.post("/bonds/valuation")
def bond_valuation() -> Any:
    """Principal, interest per period, expenses and total owed for one bond."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ValuationRequest.model_validate(raw_payload)
    response = _valuation_response(payload.bond, payload.now or utc_now())
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/bonds/valuations")
def bond_valuations() -> Any:
    """Value several bonds at one shared moment, e.g. for a table."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = BatchValuationRequest.model_validate(raw_payload)
    now = payload.now or utc_now()
    logger.info("valuing %d bonds", len(payload.bonds))
    response = BatchValuationResponse(
        valuations=[_valuation_response(bond, now) for bond in payload.bonds]
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/bonds/form")
def bond_form() -> Any:
    """Normalise the staff bond form into a bonds table row."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    form = BondForm.model_validate(raw_payload)
    return jsonify(build_bond_record(form))


@api_bp.post("/assignments/summary")
def assignments_summary() -> Any:
    """Recovery overview plus one page of per-assignment rows."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = SummaryRequest.model_validate(raw_payload)
    summary = summarize_assignments(
        payload.assignments,
        page=payload.page,
        page_size=payload.pageSize or _settings().page_size,
        now=payload.now or utc_now(),
    )
    return jsonify(summary.model_dump(mode="json"))
