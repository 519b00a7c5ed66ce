import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from linkscout.domain.check_options import DEFAULT_CONCURRENCY

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
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


USER_AGENT = get_str_env("USER_AGENT", "LinkScout/0.1")
HTTP_TIMEOUT = get_int_env("HTTP_TIMEOUT", 10)
CONCURRENCY = get_int_env("LINKSCOUT_CONCURRENCY", DEFAULT_CONCURRENCY)


def log_level() -> str:
	return (get_str_env("LINKSCOUT_LOG_LEVEL", "INFO") or "INFO").strip().upper()


def api_token() -> Optional[str]:
	return get_optional_str_env("LINKSCOUT_API_TOKEN")
