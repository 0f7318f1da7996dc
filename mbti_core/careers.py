# mbti_core/careers.py
from __future__ import annotations
import os, json, pathlib, logging, time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from openai import AzureOpenAI, OpenAIError

from . import config
from .errors import CareerServiceError

log = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "The suggested careers suitable for the particular MBTI type need to be explained "
    "with content based on their age, YouTube videos with links and thumbnail url, "
    "and books from Google Books with links cover url. "
    "Return ONLY a JSON object with keys: careers, videos, books."
)

_ENV_KEYS = {
    "endpoint":    "AZURE_OPENAI_ENDPOINT",
    "api_key":     "AZURE_OPENAI_API_KEY",
    "api_version": "AZURE_OPENAI_API_VERSION",
    "deployment":  "AZURE_OPENAI_DEPLOYMENT",
}

@dataclass(frozen=True)
class AzureSettings:
    endpoint: str
    api_key: str
    deployment: str
    api_version: str

def _from_json(path: str = ".azure_config.json") -> dict[str, str]:
    p = pathlib.Path(path)
    if not p.exists(): return {}
    try:
        j = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        log.warning("ignoring unreadable %s", path)
        return {}
    return {k: str(j.get(k, "")) for k in _ENV_KEYS}

def settings(cfg: Optional[dict] = None) -> AzureSettings:
    cfg = cfg or {}
    vals = {k: os.getenv(env, "") or str(cfg.get(env, "")) for k, env in _ENV_KEYS.items()}
    if not all(vals.values()):
        for k, v in _from_json().items():
            if not vals.get(k): vals[k] = v
    missing = [_ENV_KEYS[k] for k, v in vals.items() if not v]
    if missing:
        raise CareerServiceError(f"Azure OpenAI not configured. Missing: {', '.join(missing)}")
    return AzureSettings(**vals)

def client(s: AzureSettings) -> AzureOpenAI:
    return AzureOpenAI(azure_endpoint=s.endpoint, api_key=s.api_key, api_version=s.api_version)


class CareerAdvisor:
    """Thin client for the external generative career-suggestion service."""

    def __init__(self, cfg: Optional[dict] = None, api: Optional[AzureOpenAI] = None):
        self.cfg = cfg or {}
        self._api = api
        self._settings: Optional[AzureSettings] = None

    def _client(self) -> tuple[AzureOpenAI, str]:
        if self._settings is None:
            self._settings = settings(self.cfg)
        if self._api is None:
            self._api = client(self._settings)
        return self._api, self._settings.deployment

    def suggest_careers(self, trait: str, age: int) -> Dict[str, Any]:
        t0 = time.time()
        api, deployment = self._client()
        try:
            resp = api.chat.completions.create(
                model=deployment,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f"Generate career suggestions for MBTI type {trait} at age {age}"},
                ],
                temperature=config.CAREER_MODEL_TEMPERATURE,
                top_p=config.CAREER_MODEL_TOP_P,
                max_tokens=config.CAREER_MAX_TOKENS,
                response_format={"type": "json_object"},
            )
            raw = resp.choices[0].message.content or "{}"
            out = json.loads(raw)
        except OpenAIError as e:
            log.error("career service call failed for %s/%d: %s", trait, age, e)
            raise CareerServiceError(str(e)) from e
        except ValueError as e:
            log.error("career service returned invalid JSON for %s/%d: %s", trait, age, e)
            raise CareerServiceError(f"invalid JSON from career service: {e}") from e
        if not isinstance(out, dict):
            raise CareerServiceError("career service returned a non-object payload")
        log.info("career suggestions for %s/%d in %d ms", trait, age, int((time.time() - t0) * 1000))
        return out
