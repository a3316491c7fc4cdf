"""
Legal Guidance Server (FastAPI + SQLite FTS5)
=============================================

Provides:
- POST /api/query: classify a free-text legal question, retrieve matching
  precedent cases and return structured, non-advisory guidance
- GET /health: store connectivity and case count

Usage:
    uvicorn guidance_server:app --host 0.0.0.0 --port 3001
    python guidance_cli.py serve
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import dotenv

_ENV_PATH = Path(__file__).parent / ".env"
dotenv.load_dotenv(_ENV_PATH)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from guidance_stack import CaseStore, GateThresholds, GuidancePipeline, StoreUnavailable
from models import ErrorPayload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger("guidance.server")

DB_PATH = Path(os.environ.get("LEGAL_CASES_DB", "data/legal_cases.db"))
CORS_ALLOWED_ORIGINS = [
    o.strip() for o in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",") if o.strip()
]

app = FastAPI(
    title="Legal Guidance",
    description="Rule-based legal query triage and precedent lookup (not legal advice)",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

_pipeline: GuidancePipeline | None = None


def get_pipeline() -> GuidancePipeline:
    global _pipeline
    if _pipeline is None:
        store = CaseStore(DB_PATH)
        if not DB_PATH.exists():
            logger.warning("Case store not found at %s; queries will fail until it exists", DB_PATH)
        _pipeline = GuidancePipeline(store, thresholds=GateThresholds.from_env())
    return _pipeline


class QueryRequest(BaseModel):
    query: Optional[str] = ""


@app.post("/api/query")
def query(req: QueryRequest):
    try:
        payload = get_pipeline().answer(req.query or "")
    except Exception:
        logger.exception("Error processing query")
        payload = ErrorPayload()

    if isinstance(payload, ErrorPayload):
        return JSONResponse(status_code=500, content=payload.to_json())
    return payload.to_json()


@app.get("/health")
def health():
    try:
        store = get_pipeline().store
        if store is None:
            raise StoreUnavailable("no case store configured")
        count = store.count()
    except StoreUnavailable as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": "disconnected"},
        )
    return {"status": "ok", "database": "connected", "cases": count}
