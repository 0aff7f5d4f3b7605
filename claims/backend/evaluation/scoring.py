# claims/backend/evaluation/scoring.py
from __future__ import annotations

from claims.backend import constants
from .types import ClaimSnapshot


def clamp_score(score: int) -> int:
	return max(constants.RISK_SCORE_MIN, min(constants.RISK_SCORE_MAX, score))


def calculate_risk_score(claim: ClaimSnapshot) -> int:
	"""Additive heuristic over hours, rate, amount and supporting detail, clamped to 0..100."""
	score = 0

	if claim.hours_worked > constants.RISK_HOURS_THRESHOLD:
		score += 30
	if claim.hours_worked > constants.RISK_HOURS_EXTREME:
		score += 20

	if claim.hourly_rate > constants.RISK_RATE_HIGH:
		score += 25
	if claim.hourly_rate < constants.RISK_RATE_LOW:
		score += 15

	total = claim.total_amount
	if total > constants.RISK_AMOUNT_HIGH:
		score += 20
	if total > constants.RISK_AMOUNT_EXTREME:
		score += 30

	if claim.has_document:
		score -= 20
	if claim.notes_length > constants.RISK_NOTES_DETAIL_LENGTH:
		score -= 10

	return clamp_score(score)
