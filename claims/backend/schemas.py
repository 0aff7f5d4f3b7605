from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from claims.backend import constants


class ApiError(BaseModel):
	model_config = ConfigDict(extra="forbid")

	code: str
	message: str
	evidence: List[str] = Field(default_factory=list)


class ApiEnvelope(BaseModel):
	model_config = ConfigDict(extra="allow")

	ok: bool
	generated_at: str
	request_id: Optional[str] = None
	data: Optional[Dict[str, Any]] = None
	error: Optional[ApiError] = None


class ClaimSubmitRequest(BaseModel):
	model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

	hours_worked: Decimal = Field(
		...,
		ge=constants.INTAKE_MIN_HOURS,
		le=constants.INTAKE_MAX_HOURS,
		description="Hours worked must be between 1 and 744.",
	)
	hourly_rate: Decimal = Field(
		...,
		ge=constants.INTAKE_MIN_RATE,
		le=constants.INTAKE_MAX_RATE,
		description="Hourly rate must be between 1 and 10000.",
	)
	additional_notes: Optional[str] = None
	document_path: Optional[str] = Field(default=None, description="Path of an attachment already stored.")
	original_file_name: Optional[str] = None


class ClaimRejectRequest(BaseModel):
	model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

	reason: str = Field(..., min_length=1)
