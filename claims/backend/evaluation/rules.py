# claims/backend/evaluation/rules.py
from __future__ import annotations

from typing import Callable, Dict, List

from claims.backend import constants
from .types import ClaimSnapshot, EvaluationBuilder


RuleCheck = Callable[[ClaimSnapshot, EvaluationBuilder], EvaluationBuilder]


def check_hours_over_standard(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.hours_worked > constants.STANDARD_MONTHLY_HOURS:
		builder = builder.with_warning(
			f"Hours worked ({claim.hours_worked}) exceeds standard monthly limit (160 hours)"
		)
		builder = builder.with_manager_approval()
	return builder


def check_hours_very_low(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.hours_worked < constants.MIN_HOURS:
		builder = builder.with_warning("Very low hours claimed")
	return builder


def check_hours_over_maximum(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.hours_worked > constants.MAX_MONTHLY_HOURS:
		builder = builder.with_error("Hours exceed maximum possible hours in a month (744)")
	return builder


def check_rate_unusually_high(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.hourly_rate > constants.HIGH_RATE:
		builder = builder.with_warning(f"Hourly rate (R{claim.hourly_rate}) is unusually high")
		builder = builder.with_manager_approval()
	return builder


def check_rate_below_minimum(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.hourly_rate < constants.MIN_RECOMMENDED_RATE:
		builder = builder.with_warning(f"Hourly rate (R{claim.hourly_rate}) is below recommended minimum rate")
	return builder


def check_amount_over_escalation(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	total = claim.total_amount
	if total > constants.ESCALATION_AMOUNT:
		builder = builder.with_warning(f"Total amount (R{total:,.2f}) exceeds R50,000")
		builder = builder.with_manager_approval()
	return builder


def check_amount_over_maximum(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.total_amount > constants.MAX_AMOUNT:
		builder = builder.with_error("Total amount exceeds maximum allowed (R100,000)")
	return builder


def check_document_missing(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if claim.total_amount > constants.DOCUMENT_REQUIRED_AMOUNT and not claim.has_document:
		builder = builder.with_warning("Supporting documentation missing for claim over R5,000")
	return builder


def check_auto_approval(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	if (
		claim.hours_worked <= constants.AUTO_APPROVAL_MAX_HOURS
		and constants.AUTO_APPROVAL_MIN_RATE <= claim.hourly_rate <= constants.AUTO_APPROVAL_MAX_RATE
		and claim.total_amount <= constants.AUTO_APPROVAL_MAX_AMOUNT
		and claim.has_document
	):
		builder = builder.with_auto_approval()
	return builder


def check_submission_age(claim: ClaimSnapshot, builder: EvaluationBuilder) -> EvaluationBuilder:
	days = claim.days_since_submission
	if days > constants.STALE_CLAIM_DAYS:
		builder = builder.with_warning(f"Claim is {days} days old - urgent review required")
	return builder


RULES: Dict[str, RuleCheck] = {
	"hours_over_standard": check_hours_over_standard,
	"hours_very_low": check_hours_very_low,
	"hours_over_maximum": check_hours_over_maximum,
	"rate_unusually_high": check_rate_unusually_high,
	"rate_below_minimum": check_rate_below_minimum,
	"amount_over_escalation": check_amount_over_escalation,
	"amount_over_maximum": check_amount_over_maximum,
	"document_missing": check_document_missing,
	"auto_approval": check_auto_approval,
	"submission_age": check_submission_age,
}


def ordered_rules() -> List[RuleCheck]:
	return [RULES[name] for name in constants.RULE_ORDER]
