from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from claims.backend import constants
from claims.backend.adapters import sqlite_adapter
from claims.backend.evaluation import EvaluationResult, evaluate, snapshot_from_record
from claims.backend.services.intake_service import get_claim
from claims.backend.utils.logging import get_logger, reset_context, set_context


logger = get_logger(__name__)

_TRANSITIONS = {
	constants.STATUS_PENDING: {constants.STATUS_APPROVED, constants.STATUS_REJECTED},
	constants.STATUS_APPROVED: set(),
	constants.STATUS_REJECTED: set(),
}


class ReviewRefused(Exception):
	"""A review action the evaluation or the caller's role does not permit."""

	def __init__(self, code: str, message: str, evidence: Optional[List[str]] = None):
		super().__init__(message)
		self.code = code
		self.message = message
		self.evidence = list(evidence or [])

	@property
	def is_authorization(self) -> bool:
		return self.code in {"not_reviewer", "manager_approval_required"}

	def to_detail(self) -> Dict[str, Any]:
		return {"code": self.code, "message": self.message, "evidence": self.evidence}


def require_reviewer(role: Optional[str]) -> None:
	if role not in constants.REVIEWER_ROLES:
		raise ReviewRefused("not_reviewer", "Only reviewers may act on claims.")


def _require_transition(claim: Dict[str, Any], status: str) -> None:
	current = claim["status"]
	if status not in _TRANSITIONS.get(current, set()):
		raise ReviewRefused(
			"illegal_transition",
			f"Claim is already {current.lower()}.",
			evidence=[f"status={current}"],
		)


def _load_and_evaluate(claim_id: int, now: datetime, db_path: Optional[str]):
	claim = get_claim(claim_id, db_path=db_path)
	result = evaluate(snapshot_from_record(claim, now))
	return claim, result


def _record_decision(
	claim: Dict[str, Any],
	status: str,
	now: datetime,
	reviewed_by: str,
	rejection_reason: Optional[str],
	db_path: Optional[str],
) -> Dict[str, Any]:
	updated = sqlite_adapter.record_review(
		claim_id=claim["claim_id"],
		status=status,
		reviewed_at=now,
		reviewed_by=reviewed_by,
		rejection_reason=rejection_reason,
		expected_status=claim["status"],
		db_path=db_path,
	)
	if updated is None:
		current = get_claim(claim["claim_id"], db_path=db_path)["status"]
		raise ReviewRefused(
			"illegal_transition",
			f"Claim is already {current.lower()}.",
			evidence=[f"status={current}"],
		)
	return updated


def evaluate_claim(claim_id: int, now: datetime, db_path: Optional[str] = None) -> Dict[str, Any]:
	claim, result = _load_and_evaluate(claim_id, now, db_path)
	return {"claim": claim, "evaluation": result}


def approve_claim(
	claim_id: int,
	role: Optional[str],
	reviewer: str,
	now: datetime,
	db_path: Optional[str] = None,
) -> Dict[str, Any]:
	token = set_context(claim_id=claim_id)
	try:
		require_reviewer(role)
		claim, result = _load_and_evaluate(claim_id, now, db_path)
		_require_transition(claim, constants.STATUS_APPROVED)
		_check_manual_approval(result, role)
		updated = _record_decision(claim, constants.STATUS_APPROVED, now, reviewer, None, db_path)
		logger.info("Claim %s approved by %s (%s)", claim_id, reviewer, role)
		return {"claim": updated, "evaluation": result}
	except ReviewRefused as exc:
		logger.warning("Approval of claim %s refused: %s", claim_id, exc.code)
		raise
	finally:
		reset_context(token)


def _check_manual_approval(result: EvaluationResult, role: Optional[str]) -> None:
	if not result.is_valid:
		raise ReviewRefused(
			"claim_invalid",
			"This claim failed validation and cannot be approved.",
			evidence=list(result.errors),
		)
	if result.requires_manager_approval and role not in constants.ESCALATION_ROLES:
		raise ReviewRefused(
			"manager_approval_required",
			"This claim requires Manager approval due to: " + ", ".join(result.warnings),
			evidence=list(result.warnings),
		)


def reject_claim(
	claim_id: int,
	reason: str,
	role: Optional[str],
	reviewer: str,
	now: datetime,
	db_path: Optional[str] = None,
) -> Dict[str, Any]:
	token = set_context(claim_id=claim_id)
	try:
		require_reviewer(role)
		if not reason or not reason.strip():
			raise ValueError("Rejection reason is required.")
		claim = get_claim(claim_id, db_path=db_path)
		_require_transition(claim, constants.STATUS_REJECTED)
		updated = _record_decision(claim, constants.STATUS_REJECTED, now, reviewer, reason.strip(), db_path)
		logger.info("Claim %s rejected by %s (%s)", claim_id, reviewer, role)
		return {"claim": updated}
	except ReviewRefused as exc:
		logger.warning("Rejection of claim %s refused: %s", claim_id, exc.code)
		raise
	finally:
		reset_context(token)


def auto_approve_claim(
	claim_id: int,
	role: Optional[str],
	now: datetime,
	db_path: Optional[str] = None,
) -> Dict[str, Any]:
	token = set_context(claim_id=claim_id)
	try:
		require_reviewer(role)
		claim, result = _load_and_evaluate(claim_id, now, db_path)
		_require_transition(claim, constants.STATUS_APPROVED)
		if not (result.auto_approval_eligible and result.is_valid):
			raise ReviewRefused(
				"not_auto_approvable",
				"Claim does not meet auto-approval criteria.",
				evidence=list(result.errors) + list(result.warnings),
			)
		updated = _record_decision(
			claim,
			constants.STATUS_APPROVED,
			now,
			constants.AUTO_APPROVER_NAME,
			None,
			db_path,
		)
		logger.info("Claim %s auto-approved", claim_id)
		return {"claim": updated, "evaluation": result}
	except ReviewRefused as exc:
		logger.warning("Auto-approval of claim %s refused: %s", claim_id, exc.code)
		raise
	finally:
		reset_context(token)
