import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase

from fastapi.testclient import TestClient

from claims.backend.dependencies import get_now
from claims.backend.main import app


NOW = datetime(2026, 3, 31, 12, 0, tzinfo=timezone.utc)
COORDINATOR = {"X-User-Role": "Coordinator", "X-User-Name": "Jane Coordinator"}
MANAGER = {"X-User-Role": "Manager", "X-User-Name": "Bob Manager"}
LECTURER = {"X-User-Role": "Lecturer", "X-User-Name": "John Lecturer"}
OTHER_LECTURER = {"X-User-Role": "Lecturer", "X-User-Name": "Mary Lecturer"}


class ApiContractsTests(TestCase):
	def setUp(self) -> None:
		self._tmpdir = TemporaryDirectory()
		self._prev_db_path = os.environ.get("CLAIMS_DB_PATH")
		os.environ["CLAIMS_DB_PATH"] = (Path(self._tmpdir.name) / "claims.db").as_posix()
		self.now = NOW
		app.dependency_overrides[get_now] = lambda: self.now
		self.client = TestClient(app)

	def tearDown(self) -> None:
		app.dependency_overrides.clear()
		if self._prev_db_path is None:
			os.environ.pop("CLAIMS_DB_PATH", None)
		else:
			os.environ["CLAIMS_DB_PATH"] = self._prev_db_path
		self._tmpdir.cleanup()

	def _submit(self, lecturer=None, **overrides) -> int:
		body = {
			"hours_worked": 10,
			"hourly_rate": 150,
		}
		body.update(overrides)
		response = self.client.post("/api/claims", json=body, headers=lecturer or LECTURER)
		self.assertEqual(response.status_code, 201)
		return response.json()["data"]["claim"]["claim_id"]

	def test_health_reports_storage(self) -> None:
		response = self.client.get("/api/health")
		self.assertEqual(response.status_code, 200)
		payload = response.json()
		self.assertTrue(payload["ok"])
		self.assertEqual(payload["data"]["version"], "1.0.0")
		self.assertEqual(payload["data"]["storage"]["quick_check"], "ok")
		self.assertIn("X-Request-ID", response.headers)

	def test_submit_claim_returns_pending_claim(self) -> None:
		response = self.client.post(
			"/api/claims",
			headers=LECTURER,
			json={
				"hours_worked": 10,
				"hourly_rate": 150,
				"document_path": "/uploads/test-document.pdf",
				"original_file_name": "timesheet.pdf",
			},
		)
		self.assertEqual(response.status_code, 201)
		claim = response.json()["data"]["claim"]
		self.assertEqual(claim["status"], "Pending")
		self.assertEqual(claim["lecturer_name"], "John Lecturer")
		self.assertEqual(claim["total_amount"], "1500")
		self.assertEqual(claim["original_file_name"], "timesheet.pdf")
		self.assertEqual(claim["submitted_at"], NOW.isoformat())

	def test_submit_claim_rejects_body_lecturer_name(self) -> None:
		response = self.client.post(
			"/api/claims",
			headers=LECTURER,
			json={"lecturer_name": "Someone Else", "hours_worked": 10, "hourly_rate": 150},
		)
		self.assertEqual(response.status_code, 422)
		self.assertEqual(response.json()["error"]["code"], "validation_error")

	def test_submit_claim_requires_lecturer_role(self) -> None:
		for headers in ({}, COORDINATOR, MANAGER):
			response = self.client.post(
				"/api/claims",
				headers=headers,
				json={"hours_worked": 10, "hourly_rate": 150},
			)
			self.assertEqual(response.status_code, 403)
			self.assertEqual(response.json()["error"]["code"], "forbidden")

	def test_submit_claim_rejects_hours_out_of_range(self) -> None:
		response = self.client.post(
			"/api/claims",
			headers=LECTURER,
			json={"hours_worked": 800, "hourly_rate": 150},
		)
		self.assertEqual(response.status_code, 422)
		payload = response.json()
		self.assertFalse(payload["ok"])
		self.assertEqual(payload["error"]["code"], "validation_error")
		self.assertTrue(any("hours_worked" in item for item in payload["error"]["evidence"]))

	def test_list_and_get_claims(self) -> None:
		first = self._submit()
		second = self._submit(hours_worked=20)
		other = self._submit(lecturer=OTHER_LECTURER)

		own = self.client.get("/api/claims", headers=LECTURER)
		self.assertEqual(own.status_code, 200)
		ids = [claim["claim_id"] for claim in own.json()["data"]["claims"]]
		self.assertEqual(sorted(ids), sorted([first, second]))

		everyone = self.client.get("/api/claims", headers=COORDINATOR)
		ids = [claim["claim_id"] for claim in everyone.json()["data"]["claims"]]
		self.assertEqual(sorted(ids), sorted([first, second, other]))

		one = self.client.get(f"/api/claims/{first}", headers=LECTURER)
		self.assertEqual(one.json()["data"]["claim"]["claim_id"], first)
		hidden = self.client.get(f"/api/claims/{other}", headers=LECTURER)
		self.assertEqual(hidden.status_code, 404)

		anonymous = self.client.get("/api/claims")
		self.assertEqual(anonymous.status_code, 403)

	def test_unknown_claim_returns_404_envelope(self) -> None:
		response = self.client.get("/api/claims/999", headers=MANAGER)
		self.assertEqual(response.status_code, 404)
		payload = response.json()
		self.assertFalse(payload["ok"])
		self.assertEqual(payload["error"]["code"], "http_404")


	def test_review_view_includes_evaluation(self) -> None:
		claim_id = self._submit()
		self.now = NOW + timedelta(days=35)
		response = self.client.get(f"/api/review/{claim_id}", headers=COORDINATOR)
		self.assertEqual(response.status_code, 200)
		evaluation = response.json()["data"]["evaluation"]
		self.assertTrue(evaluation["is_valid"])
		self.assertEqual(evaluation["warnings"], ["Claim is 35 days old - urgent review required"])
		self.assertEqual(evaluation["risk_level"], "Low")
		self.assertEqual(evaluation["risk_level_color"], "success")

	def test_review_requires_reviewer_role(self) -> None:
		claim_id = self._submit()
		response = self.client.get(f"/api/review/{claim_id}")
		self.assertEqual(response.status_code, 403)
		self.assertEqual(response.json()["error"]["code"], "not_reviewer")

	def test_escalated_claim_needs_manager(self) -> None:
		claim_id = self._submit(hours_worked=200)
		refused = self.client.post(f"/api/review/{claim_id}/approve", headers=COORDINATOR)
		self.assertEqual(refused.status_code, 403)
		error = refused.json()["error"]
		self.assertEqual(error["code"], "manager_approval_required")
		self.assertIn("Hours worked (200) exceeds standard monthly limit (160 hours)", error["evidence"])

		approved = self.client.post(f"/api/review/{claim_id}/approve", headers=MANAGER)
		self.assertEqual(approved.status_code, 200)
		claim = approved.json()["data"]["claim"]
		self.assertEqual(claim["status"], "Approved")
		self.assertEqual(claim["reviewed_by"], "Bob Manager")

	def test_reject_then_approve_conflicts(self) -> None:
		claim_id = self._submit()
		rejected = self.client.post(
			f"/api/review/{claim_id}/reject",
			headers=MANAGER,
			json={"reason": "Missing supporting documentation"},
		)
		self.assertEqual(rejected.status_code, 200)
		self.assertEqual(rejected.json()["data"]["claim"]["status"], "Rejected")

		conflict = self.client.post(f"/api/review/{claim_id}/approve", headers=MANAGER)
		self.assertEqual(conflict.status_code, 409)
		self.assertEqual(conflict.json()["error"]["code"], "illegal_transition")

	def test_auto_approve(self) -> None:
		eligible = self._submit(hours_worked=40, hourly_rate=200, document_path="/uploads/t.pdf")
		response = self.client.post(f"/api/review/{eligible}/auto-approve", headers=COORDINATOR)
		self.assertEqual(response.status_code, 200)
		data = response.json()["data"]
		self.assertEqual(data["claim"]["reviewed_by"], "System (Auto-Approved)")
		self.assertTrue(data["evaluation"]["auto_approval_eligible"])

		ineligible = self._submit(hours_worked=40, hourly_rate=200)
		refused = self.client.post(f"/api/review/{ineligible}/auto-approve", headers=COORDINATOR)
		self.assertEqual(refused.status_code, 409)
		self.assertEqual(refused.json()["error"]["code"], "not_auto_approvable")
