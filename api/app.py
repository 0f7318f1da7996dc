from __future__ import annotations
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dataclasses import asdict
from datetime import date
import uuid, logging, typing as t

from mbti_core.careers import CareerAdvisor
from mbti_core.config import load_config, careers_enabled
from mbti_core.content import ContentCorrelator
from mbti_core.engine import AssessmentEngine
from mbti_core.errors import (
    CareerServiceError,
    ContentNotFound,
    DataUnavailable,
    InvalidQuestion,
    InvalidValue,
    NoEligibleQuestions,
    SessionIncomplete,
)
from mbti_core.question_bank import default_repository
from mbti_core.session import AssessmentSession
from mbti_core.storage import FileContentRepository, FileProfileStore, data_root
from mbti_core.traits import describe, is_result_code
from mbti_core.types import LIKERT_LABELS

log = logging.getLogger(__name__)

CFG = load_config()
profiles = FileProfileStore()
content = ContentCorrelator(FileContentRepository())
careers = CareerAdvisor(CFG)
engine = AssessmentEngine(
    default_repository(),
    results=profiles,
    content=content,
    careers=careers if careers_enabled(CFG) else None,
    cfg=CFG,
)

SESS: dict[str, AssessmentSession] = {}
USER_SESSION: dict[str, str] = {}  # user_id -> sid; one live session per subject

app = FastAPI(title="Personality Assessment API")

@app.get("/")
def root():
    return {"status": "ok", "service": "mbti-assessment-api"}

ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "capacitor://localhost",
    "http://localhost",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class StartReq(BaseModel):
    user_id: str | None = None
    date_of_birth: date | None = None

class AnswerReq(BaseModel):
    question_id: int
    value: int

class CareersReq(BaseModel):
    trait: str
    age: int

# ---- Helpers ----
def _serialize_question(q) -> dict[str, t.Any]:
    return {"id": q.id, "question": q.question}


def _session_view(sid: str, sess: AssessmentSession) -> dict[str, t.Any]:
    answered, total = sess.progress()
    return {
        "session_id": sid,
        "age": sess.age,
        "questions": [_serialize_question(q) for q in sess.questions],
        "options": [{"value": v, "label": lbl} for v, lbl in LIKERT_LABELS.items()],
        "answered": answered,
        "total": total,
        "complete": sess.is_complete(),
    }


def _get_session(sid: str) -> AssessmentSession:
    sess = SESS.get(sid)
    if not sess: raise HTTPException(404, "session not found")
    return sess


def _discard(sid: str) -> None:
    sess = SESS.pop(sid, None)
    if sess and sess.subject_id and USER_SESSION.get(sess.subject_id) == sid:
        USER_SESSION.pop(sess.subject_id, None)


def _date_of_birth(req: StartReq) -> date:
    if req.date_of_birth is not None:
        return req.date_of_birth
    if not req.user_id:
        raise HTTPException(422, "date_of_birth is required for anonymous sessions")
    try:
        prof = profiles.profile(req.user_id)
    except DataUnavailable as e:
        raise HTTPException(503, f"profile unavailable: {e}")
    if not prof or not prof.get("date_of_birth"):
        raise HTTPException(422, "no date_of_birth on profile")
    try:
        return date.fromisoformat(str(prof["date_of_birth"])[:10])
    except ValueError:
        raise HTTPException(422, "profile date_of_birth is not an ISO date")

# ---- Health ----
@app.get("/health")
def health():
    return {
        "data_dir": str(data_root()),
        "careers_enabled": careers_enabled(CFG),
        "active_sessions": len(SESS),
    }

# ---- Session endpoints ----
@app.post("/session/start")
def start(req: StartReq):
    dob = _date_of_birth(req)
    try:
        sess = engine.start(req.user_id, dob)
    except DataUnavailable as e:
        raise HTTPException(503, f"questions unavailable: {e}")
    except NoEligibleQuestions as e:
        raise HTTPException(404, str(e))
    if req.user_id and req.user_id in USER_SESSION:
        log.info("abandoning previous session for %s", req.user_id)
        _discard(USER_SESSION[req.user_id])
    sid = str(uuid.uuid4())
    SESS[sid] = sess
    if req.user_id:
        USER_SESSION[req.user_id] = sid
    return _session_view(sid, sess)

@app.get("/session/{sid}")
def get_session(sid: str):
    return _session_view(sid, _get_session(sid))

@app.post("/session/{sid}/answer")
def answer(sid: str, req: AnswerReq):
    sess = _get_session(sid)
    try:
        sess.record(req.question_id, req.value)
    except (InvalidQuestion, InvalidValue) as e:
        raise HTTPException(422, str(e))
    answered, total = sess.progress()
    return {"answered": answered, "total": total, "complete": sess.is_complete()}

@app.post("/session/{sid}/submit")
def submit(sid: str):
    sess = _get_session(sid)
    try:
        outcome = engine.submit(sess)
    except SessionIncomplete as e:
        raise HTTPException(409, str(e))
    _discard(sid)
    body = asdict(outcome)
    body["traits"] = describe(outcome.code)
    return body

@app.delete("/session/{sid}")
def abandon(sid: str):
    _get_session(sid)
    _discard(sid)
    return {"ok": True}

# ---- Content ----
@app.get("/content/{code}")
def get_content(code: str, age: int = Query(..., ge=0)):
    code = code.upper()
    if not is_result_code(code):
        raise HTTPException(422, f"not a result code: {code}")
    try:
        found = content.lookup(code, age)
    except ContentNotFound as e:
        raise HTTPException(404, str(e))
    except DataUnavailable as e:
        raise HTTPException(503, f"content unavailable: {e}")
    body = asdict(found)
    body["traits"] = describe(code)
    return body

@app.post("/careers")
def get_careers(req: CareersReq):
    if not careers_enabled(CFG):
        raise HTTPException(503, "career suggestions are disabled (USE_LLM_CAREERS)")
    trait = req.trait.upper()
    if not is_result_code(trait):
        raise HTTPException(422, f"not a result code: {req.trait}")
    try:
        return {"trait": trait, "age": req.age, "suggestions": careers.suggest_careers(trait, req.age)}
    except CareerServiceError as e:
        raise HTTPException(503, str(e))

@app.get("/users/{user_id}/profile")
def get_profile(user_id: str):
    try:
        prof = profiles.profile(user_id)
    except DataUnavailable as e:
        raise HTTPException(503, f"profile unavailable: {e}")
    if not prof:
        raise HTTPException(404, "profile not found")
    return prof
