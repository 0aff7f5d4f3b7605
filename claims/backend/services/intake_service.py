from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from claims.backend import constants
from claims.backend.adapters import sqlite_adapter
from claims.backend.utils.logging import get_logger


logger = get_logger(__name__)


def require_lecturer(role: Optional[str]) -> None:
	if role != constants.LECTURER_ROLE:
		raise PermissionError("Only lecturers may submit claims.")


def submit_claim(
	lecturer_name: str,
	role: Optional[str],
	hours_worked: Decimal,
	hourly_rate: Decimal,
	now: datetime,
	additional_notes: Optional[str] = None,
	document_path: Optional[str] = None,
	original_file_name: Optional[str] = None,
	db_path: Optional[str] = None,
) -> Dict[str, Any]:
	"""File a claim as ``Pending`` under the submitting lecturer's own name."""
	require_lecturer(role)
	if not lecturer_name or not lecturer_name.strip():
		raise ValueError("Lecturer name is required.")
	claim = sqlite_adapter.insert_claim(
		lecturer_name=lecturer_name.strip(),
		hours_worked=hours_worked,
		hourly_rate=hourly_rate,
		additional_notes=additional_notes,
		document_path=document_path,
		original_file_name=original_file_name,
		status=constants.STATUS_PENDING,
		submitted_at=now,
		db_path=db_path,
	)
	logger.info("Claim %s submitted by %s", claim["claim_id"], claim["lecturer_name"])
	return claim


def get_claim(claim_id: int, db_path: Optional[str] = None) -> Dict[str, Any]:
	claim = sqlite_adapter.get_claim(claim_id, db_path=db_path)
	if claim is None:
		raise LookupError("Claim not found.")
	return claim


def get_visible_claim(
	claim_id: int,
	role: Optional[str],
	viewer: str,
	db_path: Optional[str] = None,
) -> Dict[str, Any]:
	if role in constants.REVIEWER_ROLES:
		return get_claim(claim_id, db_path=db_path)
	require_lecturer(role)
	claim = get_claim(claim_id, db_path=db_path)
	if claim["lecturer_name"] != viewer:
		raise LookupError("Claim not found.")
	return claim


def list_claims(
	role: Optional[str],
	viewer: str,
	status: Optional[str] = None,
	db_path: Optional[str] = None,
) -> List[Dict[str, Any]]:
	"""Lecturers see their own claims; reviewers see every claim. Newest first."""
	if status is not None and status not in constants.CLAIM_STATUSES:
		raise ValueError("Invalid status value.")
	if role in constants.REVIEWER_ROLES:
		return sqlite_adapter.list_claims(status=status, db_path=db_path)
	require_lecturer(role)
	return sqlite_adapter.list_claims(status=status, lecturer_name=viewer, db_path=db_path)


def serialize_claim(claim: Dict[str, Any]) -> Dict[str, Any]:
	payload = dict(claim)
	total = claim["hours_worked"] * claim["hourly_rate"]
	payload["hours_worked"] = str(claim["hours_worked"])
	payload["hourly_rate"] = str(claim["hourly_rate"])
	payload["total_amount"] = str(total)
	payload["submitted_at"] = claim["submitted_at"].isoformat()
	payload["reviewed_at"] = claim["reviewed_at"].isoformat() if claim["reviewed_at"] else None
	return payload
