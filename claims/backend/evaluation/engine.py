# claims/backend/evaluation/engine.py
from __future__ import annotations

from datetime import datetime
from decimal import InvalidOperation, localcontext
from typing import Any, Mapping

from .rules import ordered_rules
from .scoring import calculate_risk_score
from .types import ClaimSnapshot, EvaluationBuilder, EvaluationResult


def evaluate(claim: ClaimSnapshot) -> EvaluationResult:
	# NaN compares false and Infinity * 0 yields NaN instead of raising.
	with localcontext() as ctx:
		ctx.traps[InvalidOperation] = False
		builder = EvaluationBuilder()
		for rule in ordered_rules():
			builder = rule(claim, builder)
		builder = builder.with_risk_score(calculate_risk_score(claim))
	return builder.build()


def snapshot_from_record(record: Mapping[str, Any], now: datetime) -> ClaimSnapshot:
	"""Project a stored claim row onto the evaluator input.

	``total_amount`` is never read from the record; the snapshot derives it
	from hours and rate.
	"""
	notes = record.get("additional_notes") or ""
	document_path = record.get("document_path") or ""
	return ClaimSnapshot(
		hours_worked=record["hours_worked"],
		hourly_rate=record["hourly_rate"],
		has_document=bool(document_path),
		notes_length=len(notes),
		submitted_at=record["submitted_at"],
		now=now,
	)
