from claims.backend.evaluation.engine import evaluate, snapshot_from_record
from claims.backend.evaluation.types import ClaimSnapshot, EvaluationBuilder, EvaluationResult

__all__ = [
	"ClaimSnapshot",
	"EvaluationBuilder",
	"EvaluationResult",
	"evaluate",
	"snapshot_from_record",
]
