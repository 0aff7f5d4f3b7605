from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from claims.backend import constants


def _split_csv(raw: str) -> List[str]:
	return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
	db_path: str = constants.DEFAULT_DB_PATH
	log_level: str = "INFO"
	log_file: Optional[str] = None
	cors_allow_origins: List[str] = field(default_factory=lambda: list(constants.DEFAULT_CORS_ALLOW_ORIGINS))


def load_settings() -> Settings:
	"""Read settings from ``CLAIMS_*`` environment variables, falling back to constants."""
	db_path = os.getenv("CLAIMS_DB_PATH", "").strip() or constants.DEFAULT_DB_PATH
	log_level = os.getenv("CLAIMS_LOG_LEVEL", "INFO").strip().upper() or "INFO"
	log_file = os.getenv("CLAIMS_LOG_FILE", "").strip() or None
	origins_raw = os.getenv("CLAIMS_CORS_ALLOW_ORIGINS", "").strip()
	origins = _split_csv(origins_raw) if origins_raw else list(constants.DEFAULT_CORS_ALLOW_ORIGINS)
	return Settings(
		db_path=db_path,
		log_level=log_level,
		log_file=log_file,
		cors_allow_origins=origins,
	)
