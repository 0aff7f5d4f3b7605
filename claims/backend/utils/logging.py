"""Logging setup for the claims review service."""

import logging
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s%(log_context)s"

_log_context: ContextVar[Dict[str, Any]] = ContextVar("claims_log_context", default={})


class ContextFilter(logging.Filter):
	"""Add the current request's context fields to log records."""

	def filter(self, record: logging.LogRecord) -> bool:
		context = _log_context.get()
		for key, value in context.items():
			setattr(record, key, value)
		if context:
			fields = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
			record.log_context = f" [{fields}]"
		else:
			record.log_context = ""
		return True


_context_filter = ContextFilter()


def setup_logging(
	level: str = "INFO",
	log_format: str = DEFAULT_FORMAT,
	log_file: Optional[str] = None,
) -> logging.Logger:
	"""
	Configure the root logger with a console handler and an optional file handler.

	Args:
		level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
		log_format: Format string for log messages
		log_file: Optional path to log file

	Returns:
		Configured root logger
	"""
	numeric_level = getattr(logging, level.upper(), logging.INFO)

	root_logger = logging.getLogger()
	root_logger.setLevel(numeric_level)
	root_logger.handlers.clear()

	formatter = logging.Formatter(log_format)

	console_handler = logging.StreamHandler()
	console_handler.setLevel(numeric_level)
	console_handler.setFormatter(formatter)
	console_handler.addFilter(_context_filter)
	root_logger.addHandler(console_handler)

	if log_file:
		log_path = Path(log_file)
		log_path.parent.mkdir(parents=True, exist_ok=True)

		file_handler = logging.FileHandler(log_file)
		file_handler.setLevel(numeric_level)
		file_handler.setFormatter(formatter)
		file_handler.addFilter(_context_filter)
		root_logger.addHandler(file_handler)

	return root_logger


def get_logger(name: str) -> logging.Logger:
	return logging.getLogger(name)


def get_context() -> Dict[str, Any]:
	return dict(_log_context.get())


def set_context(**kwargs) -> Token:
	"""
	Add context fields for log messages emitted in the current context.

	Each thread and asyncio task sees its own copy. Pass the returned token
	to ``reset_context`` to restore the previous fields.
	"""
	return _log_context.set({**_log_context.get(), **kwargs})


def reset_context(token: Token) -> None:
	_log_context.reset(token)
