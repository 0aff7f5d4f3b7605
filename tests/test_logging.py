from __future__ import annotations

import logging
import threading
from unittest import TestCase

from claims.backend.utils.logging import (
	DEFAULT_FORMAT,
	ContextFilter,
	get_context,
	reset_context,
	set_context,
)


def _record() -> logging.LogRecord:
	return logging.LogRecord("claims.test", logging.INFO, __file__, 1, "decision", None, None)


class LogContextTests(TestCase):
	def test_context_is_not_shared_between_threads(self) -> None:
		token = set_context(claim_id=1)
		try:
			seen = {}

			def other_thread() -> None:
				inner = set_context(claim_id=2, reviewer="Bob Manager")
				seen["inside"] = get_context()
				reset_context(inner)

			worker = threading.Thread(target=other_thread)
			worker.start()
			worker.join()

			self.assertEqual(seen["inside"], {"claim_id": 2, "reviewer": "Bob Manager"})
			self.assertEqual(get_context(), {"claim_id": 1})
		finally:
			reset_context(token)
		self.assertEqual(get_context(), {})

	def test_reset_restores_outer_fields(self) -> None:
		outer = set_context(claim_id=1)
		inner = set_context(reviewer="HR Officer")
		self.assertEqual(get_context(), {"claim_id": 1, "reviewer": "HR Officer"})
		reset_context(inner)
		self.assertEqual(get_context(), {"claim_id": 1})
		reset_context(outer)

	def test_filter_renders_context_into_default_format(self) -> None:
		formatter = logging.Formatter(DEFAULT_FORMAT)
		token = set_context(claim_id=1)
		try:
			record = _record()
			self.assertTrue(ContextFilter().filter(record))
			self.assertEqual(record.claim_id, 1)
			self.assertEqual(record.log_context, " [claim_id=1]")
			self.assertTrue(formatter.format(record).endswith("decision [claim_id=1]"))
		finally:
			reset_context(token)

		plain = _record()
		ContextFilter().filter(plain)
		self.assertEqual(plain.log_context, "")
		self.assertTrue(formatter.format(plain).endswith("decision"))
