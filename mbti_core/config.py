from __future__ import annotations
import os, json, pathlib, random


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


SAMPLE_SIZE: int = 20

BANK_MIN_PER_DICHOTOMY: int = 5
AUDIT_AGE_MIN: int = 10
AUDIT_AGE_MAX: int = 99

CONTENT_FETCH_WORKERS: int = 3

USE_LLM_CAREERS: bool = False
CAREER_MODEL_TEMPERATURE: float = 1.0
CAREER_MODEL_TOP_P: float = 0.95
CAREER_MAX_TOKENS: int = 8192

DATA_DIR: str = "data"

# // env overrides for staging/ops; defaults remain conservative.
SAMPLE_SIZE = max(1, _env_int("SAMPLE_SIZE", SAMPLE_SIZE))
BANK_MIN_PER_DICHOTOMY = _env_int("BANK_MIN_PER_DICHOTOMY", BANK_MIN_PER_DICHOTOMY)
AUDIT_AGE_MIN = _env_int("AUDIT_AGE_MIN", AUDIT_AGE_MIN)
AUDIT_AGE_MAX = _env_int("AUDIT_AGE_MAX", AUDIT_AGE_MAX)
CONTENT_FETCH_WORKERS = max(1, _env_int("CONTENT_FETCH_WORKERS", CONTENT_FETCH_WORKERS))
USE_LLM_CAREERS = _env_bool("USE_LLM_CAREERS", USE_LLM_CAREERS)
DATA_DIR = os.getenv("DATA_DIR", DATA_DIR)


def _env_true(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1","true","yes","on")
def _seed(raw) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None
def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("USE_LLM_CAREERS"): cfg["USE_LLM_CAREERS"] = _env_true("USE_LLM_CAREERS")
    if e.get("SAMPLE_SIZE"): cfg["SAMPLE_SIZE"] = SAMPLE_SIZE
    for k in ("AZURE_OPENAI_ENDPOINT","AZURE_OPENAI_API_VERSION","AZURE_OPENAI_API_KEY","AZURE_OPENAI_DEPLOYMENT"):
        if e.get(k): cfg[k] = e.get(k)
    if _seed(e.get("SEED")) is not None: cfg["SEED"] = _seed(e.get("SEED"))
    return cfg
def careers_enabled(cfg: dict) -> bool:
    return bool(cfg.get("USE_LLM_CAREERS", USE_LLM_CAREERS))
def sample_size(cfg: dict) -> int:
    try:
        return max(1, int(cfg.get("SAMPLE_SIZE", SAMPLE_SIZE)))
    except (TypeError, ValueError):
        return SAMPLE_SIZE
def make_rng(cfg: dict) -> random.Random:
    # non-numeric seeds fall back to an unseeded generator
    s = _seed(cfg.get("SEED"))
    return random.Random(s) if s is not None else random.Random()
