from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from claims.backend.dependencies import Identity, get_db_path, get_identity, get_now
from claims.backend.response import success_response
from claims.backend.schemas import ApiEnvelope, ClaimSubmitRequest
from claims.backend.services import intake_service


router = APIRouter(prefix="/api/claims", tags=["claims"])


def _forbidden(exc: PermissionError) -> HTTPException:
	return HTTPException(status_code=403, detail={"code": "forbidden", "message": str(exc)})


@router.post("", response_model=ApiEnvelope, status_code=201)
def submit_claim(
	request: Request,
	payload: ClaimSubmitRequest,
	identity: Identity = Depends(get_identity),
	now: datetime = Depends(get_now),
	db_path: str = Depends(get_db_path),
):
	try:
		claim = intake_service.submit_claim(
			lecturer_name=identity.name,
			role=identity.role,
			hours_worked=payload.hours_worked,
			hourly_rate=payload.hourly_rate,
			now=now,
			additional_notes=payload.additional_notes,
			document_path=payload.document_path,
			original_file_name=payload.original_file_name,
			db_path=db_path,
		)
	except PermissionError as exc:
		raise _forbidden(exc) from exc
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	return success_response(
		request=request,
		data={"claim": intake_service.serialize_claim(claim)},
	)


@router.get("", response_model=ApiEnvelope)
def list_claims(
	request: Request,
	status: Optional[str] = None,
	identity: Identity = Depends(get_identity),
	db_path: str = Depends(get_db_path),
):
	try:
		claims = intake_service.list_claims(
			role=identity.role,
			viewer=identity.name,
			status=status,
			db_path=db_path,
		)
	except PermissionError as exc:
		raise _forbidden(exc) from exc
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	return success_response(
		request=request,
		data={"claims": [intake_service.serialize_claim(claim) for claim in claims]},
	)


@router.get("/{claim_id}", response_model=ApiEnvelope)
def get_claim(
	request: Request,
	claim_id: int,
	identity: Identity = Depends(get_identity),
	db_path: str = Depends(get_db_path),
):
	try:
		claim = intake_service.get_visible_claim(
			claim_id,
			role=identity.role,
			viewer=identity.name,
			db_path=db_path,
		)
	except PermissionError as exc:
		raise _forbidden(exc) from exc
	except LookupError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return success_response(
		request=request,
		data={"claim": intake_service.serialize_claim(claim)},
	)
