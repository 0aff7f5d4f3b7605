from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from claims.backend import constants
from claims.backend.adapters import sqlite_adapter
from claims.backend.dependencies import get_db_path
from claims.backend.response import success_response
from claims.backend.schemas import ApiEnvelope


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=ApiEnvelope)
def get_health(request: Request, db_path: str = Depends(get_db_path)):
	return success_response(
		request=request,
		data={
			"app": constants.APP_NAME,
			"version": constants.APP_VERSION,
			"storage": sqlite_adapter.get_storage_meta(db_path),
		},
	)
