# textintel/main.py
"""
FastAPI application exposing the text intelligence engine, with CORS and audit logging.
"""
import hashlib
import logging
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

# Local module imports
from . import config, guardrails, schemas
from .engine import engine
from .guardrails import InvalidPostError

load_dotenv()

# --- Logging ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
audit_log = logging.getLogger("audit")


def audit_event(kind: str, payload: dict):
    """Logs an audit event if enabled."""
    if not config.get_cfg()["guardrails"]["audit_log"]:
        return
    payload = dict(payload)
    if "text" in payload:
        payload["text_sha256"] = hashlib.sha256(payload["text"].encode()).hexdigest()
        del payload["text"]
    payload["ts"] = int(time.time())
    audit_log.info({"event": kind, **payload})


@asynccontextmanager
async def lifespan(app: FastAPI):
    # an initialization failure propagates and aborts startup
    logger.info("Initializing NLP engine...")
    engine.initialize()
    if config.get_cfg()["server"]["reload_config_seconds"] > 0:
        config.start_config_reloader()
    yield
    logger.info("Shutting down")


# --- App Setup ---
app = FastAPI(title="Text Intelligence Engine", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cfg()["server"]["cors_allow_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Endpoints ---

@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "initialized": engine.initialized}


@app.get("/api/social-media/languages", response_model=schemas.LanguagesResponse)
def languages():
    """Supported language codes and their display names."""
    return schemas.LanguagesResponse(
        languages={lang.value: guardrails.language_name(lang.value) for lang in schemas.Language}
    )


@app.post("/api/social-media/analyze-text", response_model=schemas.AnalysisResult)
def analyze_text(req: schemas.AnalyzeRequest):
    """Analyzes a single piece of text."""
    try:
        result = engine.analyze_text(req.text, req.language)
    except InvalidPostError as e:
        raise HTTPException(status_code=400, detail=str(e))
    audit_event("analyze", {
        "text": req.text,
        "language": result.language.value,
        "threat_level": result.threat_level.value,
    })
    return result


@app.post("/api/social-media/analyze-batch", response_model=schemas.AnalyzeBatchResponse)
def analyze_batch(req: schemas.AnalyzeBatchRequest):
    """Analyzes a batch of posts; a bad post yields a default result instead of failing the batch."""
    results = engine.batch_analyze(req.posts)
    audit_event("analyze_batch", {
        "count": len(results),
        "flagged": sum(1 for r in results if r.threat_level in (schemas.ThreatLevel.HIGH, schemas.ThreatLevel.CRITICAL)),
    })
    return schemas.AnalyzeBatchResponse(results=results)


@app.post("/api/social-media/intent", response_model=schemas.IntentResult)
def intent(req: schemas.AnalyzeRequest):
    """Classifies the intent of a text with the example-based model."""
    try:
        return engine.classify_intent(req.text, req.language)
    except InvalidPostError as e:
        raise HTTPException(status_code=400, detail=str(e))
