import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return None


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


DEFAULT_USER_AGENT = "SiteCrawl/1.0 (site-crawler)"


def user_agent() -> str:
	return get_str_env("USER_AGENT", DEFAULT_USER_AGENT)


def http_timeout() -> Optional[int]:
	# Unset means requests wait indefinitely.
	return get_optional_int_env("HTTP_TIMEOUT")


def fetch_workers() -> Optional[int]:
	return get_optional_int_env("FETCH_WORKERS")


def poll_interval_seconds() -> float:
	return get_float_env("SITECRAWL_POLL_INTERVAL", 0.1)


def log_level() -> str:
	return (os.getenv("LOG_LEVEL", "WARNING") or "WARNING").strip().upper()
