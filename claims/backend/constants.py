from decimal import Decimal

DEFAULT_DB_PATH = "claims.db"
APP_NAME = "Lecturer Claims Review"
APP_VERSION = "1.0.0"
DEFAULT_CORS_ALLOW_ORIGINS = [
	"http://localhost",
	"http://127.0.0.1",
	"http://localhost:3000",
]
DEFAULT_TRUSTED_HOSTS = [
	"127.0.0.1",
	"localhost",
	"testserver",
]
SQLITE_BUSY_TIMEOUT_MS = 5000

# Rule thresholds
STANDARD_MONTHLY_HOURS = Decimal("160")
MIN_HOURS = Decimal("1")
MAX_MONTHLY_HOURS = Decimal("744")
HIGH_RATE = Decimal("1000")
MIN_RECOMMENDED_RATE = Decimal("100")
ESCALATION_AMOUNT = Decimal("50000")
MAX_AMOUNT = Decimal("100000")
DOCUMENT_REQUIRED_AMOUNT = Decimal("5000")
AUTO_APPROVAL_MAX_HOURS = Decimal("40")
AUTO_APPROVAL_MIN_RATE = Decimal("150")
AUTO_APPROVAL_MAX_RATE = Decimal("500")
AUTO_APPROVAL_MAX_AMOUNT = Decimal("10000")
STALE_CLAIM_DAYS = 30

# Risk score weights
RISK_HOURS_THRESHOLD = Decimal("160")
RISK_HOURS_EXTREME = Decimal("200")
RISK_RATE_HIGH = Decimal("800")
RISK_RATE_LOW = Decimal("100")
RISK_AMOUNT_HIGH = Decimal("30000")
RISK_AMOUNT_EXTREME = Decimal("50000")
RISK_NOTES_DETAIL_LENGTH = 50
RISK_SCORE_MIN = 0
RISK_SCORE_MAX = 100
RISK_HIGH_FLOOR = 70
RISK_MEDIUM_FLOOR = 40

RULE_ORDER = [
	"hours_over_standard",
	"hours_very_low",
	"hours_over_maximum",
	"rate_unusually_high",
	"rate_below_minimum",
	"amount_over_escalation",
	"amount_over_maximum",
	"document_missing",
	"auto_approval",
	"submission_age",
]

# Intake bounds
INTAKE_MIN_HOURS = 1
INTAKE_MAX_HOURS = 744
INTAKE_MIN_RATE = 1
INTAKE_MAX_RATE = 10000

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Approved"
STATUS_REJECTED = "Rejected"
CLAIM_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)

LECTURER_ROLE = "Lecturer"
REVIEWER_ROLES = ("Coordinator", "Manager", "HR")
ESCALATION_ROLES = ("Manager", "HR")
AUTO_APPROVER_NAME = "System (Auto-Approved)"
