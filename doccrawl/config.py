import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
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
	if raw is None or raw.strip() == "":
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


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	return raw.strip().lower() in ("1", "true", "yes", "on")


DOCS_BASE_PATH = get_str_env("DOCS_BASE_PATH", "./docs")
USER_AGENT = get_str_env(
	"USER_AGENT",
	"Mozilla/5.0 (compatible; doccrawl/0.4; +https://github.com/doccrawl/doccrawl)",
)
PAGE_TIMEOUT_MS = get_int_env("PAGE_TIMEOUT_MS", 30_000)
DEFAULT_MAX_DEPTH = get_int_env("DEFAULT_MAX_DEPTH", 3)
DEFAULT_RATE_LIMIT = get_int_env("DEFAULT_RATE_LIMIT", 2)
FETCH_MODE = get_str_env("FETCH_MODE", "headless_chromium").strip().lower()
