# claims/backend/evaluation/types.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Tuple, Union

from claims.backend import constants


Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
	if isinstance(value, Decimal):
		return value
	return Decimal(str(value))


@dataclass(frozen=True)
class ClaimSnapshot:
	hours_worked: Decimal
	hourly_rate: Decimal
	has_document: bool
	notes_length: int
	submitted_at: datetime
	now: datetime

	def __post_init__(self) -> None:
		object.__setattr__(self, "hours_worked", _to_decimal(self.hours_worked))
		object.__setattr__(self, "hourly_rate", _to_decimal(self.hourly_rate))

	@property
	def total_amount(self) -> Decimal:
		return self.hours_worked * self.hourly_rate

	@property
	def days_since_submission(self) -> int:
		return (self.now - self.submitted_at).days


def risk_level_for(score: int) -> str:
	if score >= constants.RISK_HIGH_FLOOR:
		return "High"
	if score >= constants.RISK_MEDIUM_FLOOR:
		return "Medium"
	return "Low"


def risk_level_color_for(score: int) -> str:
	if score >= constants.RISK_HIGH_FLOOR:
		return "danger"
	if score >= constants.RISK_MEDIUM_FLOOR:
		return "warning"
	return "success"


@dataclass(frozen=True)
class EvaluationResult:
	is_valid: bool
	warnings: Tuple[str, ...]
	errors: Tuple[str, ...]
	requires_manager_approval: bool
	auto_approval_eligible: bool
	risk_score: int

	@property
	def risk_level(self) -> str:
		return risk_level_for(self.risk_score)

	@property
	def risk_level_color(self) -> str:
		return risk_level_color_for(self.risk_score)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"is_valid": self.is_valid,
			"warnings": list(self.warnings),
			"errors": list(self.errors),
			"requires_manager_approval": self.requires_manager_approval,
			"auto_approval_eligible": self.auto_approval_eligible,
			"risk_score": self.risk_score,
			"risk_level": self.risk_level,
			"risk_level_color": self.risk_level_color,
		}


@dataclass(frozen=True)
class EvaluationBuilder:
	"""Accumulates findings without mutation; every ``with_*`` call returns a new builder."""

	warnings: Tuple[str, ...] = ()
	errors: Tuple[str, ...] = ()
	requires_manager_approval: bool = False
	auto_approval_eligible: bool = False
	risk_score: int = 0

	def with_warning(self, message: str) -> "EvaluationBuilder":
		return replace(self, warnings=self.warnings + (message,))

	def with_error(self, message: str) -> "EvaluationBuilder":
		return replace(self, errors=self.errors + (message,))

	def with_manager_approval(self) -> "EvaluationBuilder":
		return replace(self, requires_manager_approval=True)

	def with_auto_approval(self) -> "EvaluationBuilder":
		return replace(self, auto_approval_eligible=True)

	def with_risk_score(self, score: int) -> "EvaluationBuilder":
		return replace(self, risk_score=score)

	def build(self) -> EvaluationResult:
		return EvaluationResult(
			is_valid=not self.errors,
			warnings=self.warnings,
			errors=self.errors,
			requires_manager_approval=self.requires_manager_approval,
			auto_approval_eligible=self.auto_approval_eligible,
			risk_score=self.risk_score,
		)
