from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fastapi import Header

from claims.backend.config import load_settings


@dataclass(frozen=True)
class Identity:
	role: Optional[str]
	name: str


def get_now() -> datetime:
	return datetime.now(timezone.utc)


def get_db_path() -> str:
	return load_settings().db_path


def get_identity(
	x_user_role: Optional[str] = Header(default=None),
	x_user_name: Optional[str] = Header(default=None),
) -> Identity:
	"""Caller identity as forwarded by the upstream session provider."""
	role = x_user_role.strip() if x_user_role else None
	name = x_user_name.strip() if x_user_name and x_user_name.strip() else (role or "unknown")
	return Identity(role=role, name=name)
