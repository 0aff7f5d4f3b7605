from __future__ import annotations

import sqlite3
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from claims.backend import constants


_CLAIM_COLUMNS = (
	"claim_id, lecturer_name, hours_worked, hourly_rate, additional_notes, document_path, "
	"original_file_name, status, submitted_at, reviewed_at, reviewed_by, rejection_reason"
)


def _get_db_path(db_path: Optional[str]) -> str:
	if db_path:
		return db_path
	return constants.DEFAULT_DB_PATH


def _connect(path: str) -> sqlite3.Connection:
	conn = sqlite3.connect(path, timeout=constants.SQLITE_BUSY_TIMEOUT_MS / 1000)
	conn.execute("PRAGMA journal_mode=WAL")
	conn.execute("PRAGMA synchronous=NORMAL")
	conn.execute(f"PRAGMA busy_timeout={constants.SQLITE_BUSY_TIMEOUT_MS}")
	return conn


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
	if value is None:
		return None
	return datetime.fromisoformat(value)


def _row_to_claim(row: sqlite3.Row) -> Dict[str, Any]:
	claim = dict(row)
	claim["hours_worked"] = Decimal(claim["hours_worked"])
	claim["hourly_rate"] = Decimal(claim["hourly_rate"])
	claim["submitted_at"] = _parse_ts(claim["submitted_at"])
	claim["reviewed_at"] = _parse_ts(claim["reviewed_at"])
	return claim


def init_db(db_path: Optional[str] = None) -> None:
	path = _get_db_path(db_path)
	Path(path).parent.mkdir(parents=True, exist_ok=True)
	conn = _connect(path)
	try:
		conn.execute(
			"""
			CREATE TABLE IF NOT EXISTS claims (
				claim_id INTEGER PRIMARY KEY AUTOINCREMENT,
				lecturer_name TEXT NOT NULL,
				hours_worked TEXT NOT NULL,
				hourly_rate TEXT NOT NULL,
				additional_notes TEXT,
				document_path TEXT,
				original_file_name TEXT,
				status TEXT NOT NULL,
				submitted_at TEXT NOT NULL,
				reviewed_at TEXT,
				reviewed_by TEXT,
				rejection_reason TEXT
			)
			"""
		)
		conn.commit()
	finally:
		conn.close()


def insert_claim(
	lecturer_name: str,
	hours_worked: Decimal,
	hourly_rate: Decimal,
	additional_notes: Optional[str],
	document_path: Optional[str],
	original_file_name: Optional[str],
	status: str,
	submitted_at: datetime,
	db_path: Optional[str] = None,
) -> Dict[str, Any]:
	init_db(db_path)
	path = _get_db_path(db_path)
	conn = _connect(path)
	try:
		cursor = conn.execute(
			"""
			INSERT INTO claims (
				lecturer_name, hours_worked, hourly_rate, additional_notes,
				document_path, original_file_name, status, submitted_at
			)
			VALUES (?, ?, ?, ?, ?, ?, ?, ?)
			""",
			(
				lecturer_name,
				str(hours_worked),
				str(hourly_rate),
				additional_notes,
				document_path,
				original_file_name,
				status,
				submitted_at.isoformat(),
			),
		)
		conn.commit()
		claim_id = cursor.lastrowid
	finally:
		conn.close()
	claim = get_claim(claim_id, db_path=db_path)
	if claim is None:
		raise LookupError("Claim not found.")
	return claim


def get_claim(claim_id: int, db_path: Optional[str] = None) -> Optional[Dict[str, Any]]:
	init_db(db_path)
	path = _get_db_path(db_path)
	conn = _connect(path)
	try:
		conn.row_factory = sqlite3.Row
		cursor = conn.cursor()
		cursor.execute(f"SELECT {_CLAIM_COLUMNS} FROM claims WHERE claim_id = ?", (claim_id,))
		row = cursor.fetchone()
		if row is None:
			return None
		return _row_to_claim(row)
	finally:
		conn.close()


def list_claims(
	status: Optional[str] = None,
	lecturer_name: Optional[str] = None,
	db_path: Optional[str] = None,
) -> List[Dict[str, Any]]:
	init_db(db_path)
	path = _get_db_path(db_path)
	clauses: List[str] = []
	params: List[Any] = []
	if status:
		clauses.append("status = ?")
		params.append(status)
	if lecturer_name is not None:
		clauses.append("lecturer_name = ?")
		params.append(lecturer_name)
	where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
	conn = _connect(path)
	try:
		conn.row_factory = sqlite3.Row
		cursor = conn.cursor()
		cursor.execute(
			f"SELECT {_CLAIM_COLUMNS} FROM claims{where} ORDER BY submitted_at DESC, claim_id DESC",
			params,
		)
		rows = cursor.fetchall()
		return [_row_to_claim(row) for row in rows]
	finally:
		conn.close()


def record_review(
	claim_id: int,
	status: str,
	reviewed_at: datetime,
	reviewed_by: str,
	rejection_reason: Optional[str] = None,
	expected_status: str = constants.STATUS_PENDING,
	db_path: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
	"""Apply a review decision only while the claim is still in ``expected_status``.

	Returns ``None`` when the claim exists but has already moved on, and raises
	``LookupError`` when it does not exist.
	"""
	init_db(db_path)
	path = _get_db_path(db_path)
	conn = _connect(path)
	try:
		cursor = conn.execute(
			"""
			UPDATE claims
			SET status = ?, reviewed_at = ?, reviewed_by = ?, rejection_reason = ?
			WHERE claim_id = ? AND status = ?
			""",
			(status, reviewed_at.isoformat(), reviewed_by, rejection_reason, claim_id, expected_status),
		)
		conn.commit()
		updated = cursor.rowcount
	finally:
		conn.close()
	claim = get_claim(claim_id, db_path=db_path)
	if claim is None:
		raise LookupError("Claim not found.")
	if not updated:
		return None
	return claim


def get_storage_meta(db_path: Optional[str] = None) -> Dict[str, object]:
	init_db(db_path)
	path = _get_db_path(db_path)
	conn = _connect(path)
	try:
		quick_check = conn.execute("PRAGMA quick_check").fetchone()[0]
		journal_mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
		return {
			"path": path,
			"journal_mode": journal_mode,
			"quick_check": quick_check,
		}
	finally:
		conn.close()
