from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from claims.backend.dependencies import Identity, get_db_path, get_identity, get_now
from claims.backend.response import success_response
from claims.backend.schemas import ApiEnvelope, ClaimRejectRequest
from claims.backend.services import review_service
from claims.backend.services.intake_service import serialize_claim
from claims.backend.services.review_service import ReviewRefused


router = APIRouter(prefix="/api/review", tags=["review"])


def _outcome_data(outcome: Dict[str, Any]) -> Dict[str, Any]:
	data: Dict[str, Any] = {"claim": serialize_claim(outcome["claim"])}
	if "evaluation" in outcome:
		data["evaluation"] = outcome["evaluation"].to_dict()
	return data


def _refused(exc: ReviewRefused) -> HTTPException:
	status_code = 403 if exc.is_authorization else 409
	return HTTPException(status_code=status_code, detail=exc.to_detail())


@router.get("/{claim_id}", response_model=ApiEnvelope)
def view_claim(
	request: Request,
	claim_id: int,
	identity: Identity = Depends(get_identity),
	now: datetime = Depends(get_now),
	db_path: str = Depends(get_db_path),
):
	try:
		review_service.require_reviewer(identity.role)
		outcome = review_service.evaluate_claim(claim_id, now=now, db_path=db_path)
	except ReviewRefused as exc:
		raise _refused(exc) from exc
	except LookupError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return success_response(request=request, data=_outcome_data(outcome))


@router.post("/{claim_id}/approve", response_model=ApiEnvelope)
def approve_claim(
	request: Request,
	claim_id: int,
	identity: Identity = Depends(get_identity),
	now: datetime = Depends(get_now),
	db_path: str = Depends(get_db_path),
):
	try:
		outcome = review_service.approve_claim(
			claim_id,
			role=identity.role,
			reviewer=identity.name,
			now=now,
			db_path=db_path,
		)
	except ReviewRefused as exc:
		raise _refused(exc) from exc
	except LookupError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return success_response(request=request, data=_outcome_data(outcome))


@router.post("/{claim_id}/reject", response_model=ApiEnvelope)
def reject_claim(
	request: Request,
	claim_id: int,
	payload: ClaimRejectRequest,
	identity: Identity = Depends(get_identity),
	now: datetime = Depends(get_now),
	db_path: str = Depends(get_db_path),
):
	try:
		outcome = review_service.reject_claim(
			claim_id,
			reason=payload.reason,
			role=identity.role,
			reviewer=identity.name,
			now=now,
			db_path=db_path,
		)
	except ReviewRefused as exc:
		raise _refused(exc) from exc
	except LookupError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	return success_response(request=request, data=_outcome_data(outcome))


@router.post("/{claim_id}/auto-approve", response_model=ApiEnvelope)
def auto_approve_claim(
	request: Request,
	claim_id: int,
	identity: Identity = Depends(get_identity),
	now: datetime = Depends(get_now),
	db_path: str = Depends(get_db_path),
):
	try:
		outcome = review_service.auto_approve_claim(
			claim_id,
			role=identity.role,
			now=now,
			db_path=db_path,
		)
	except ReviewRefused as exc:
		raise _refused(exc) from exc
	except LookupError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return success_response(request=request, data=_outcome_data(outcome))
