print("🚀 Starting app.py", flush=True)

import os
for k in ("OMP_NUM_THREADS", "OPENBLAS_NUM_THREADS", "MKL_NUM_THREADS", "NUMEXPR_NUM_THREADS"):
    os.environ.setdefault(k, "1")

from datetime import datetime, timezone
from typing import List, Optional, Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from errors import AnalysisError
from townships import TOWNSHIPS


# ---------------- App & middleware ----------------
app = FastAPI(title="Valuation Worksheet Analysis API", version="1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True, allow_methods=["*"], allow_headers=["*"],
)


# ---------------- Errors ----------------
@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    print(f"❌ {exc.__class__.__name__}: {exc.message}", flush=True)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    print(f"❌ Analysis error: {exc!r}", flush=True)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal error while analyzing PINs"})


# ---------------- Health ----------------
@app.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"}


@app.get("/api/health")
def api_health():
    return {"status": "ok"}


# ---------------- Townships ----------------
@app.get("/api/townships")
def api_townships():
    return [{"id": t.key, "name": t.name, "number": t.number} for t in TOWNSHIPS.values()]


# ---------------- Analysis ----------------
class AnalyzeRequest(BaseModel):
    pins: Optional[List[str]] = None
    township: str
    year: Union[int, str]
    taxRate: float
    eqFactor: float


@app.post("/api/analyze")
def api_analyze(body: AnalyzeRequest):
    from orchestrator import analyze_pins
    return analyze_pins(body.pins, body.township, body.year, body.taxRate, body.eqFactor)
