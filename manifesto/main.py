"""
Manifesto Enforcer FastAPI Application — HTTP host surface for the engine.

  POST /manifesto/compile  → structured rules from a manifesto document
  POST /manifesto/prompt   → AI prompt embedding the compiled rules
  POST /compliance/check   → pattern-level compliance result and score
  POST /diagnostics/scan   → syntax-aware diagnostics for one document
  POST /enforce            → allow (200) or block (409) a lifecycle action
  GET  /enforce/status     → which enforcement delegates are wired
  GET  /metrics            → recent performance samples
  GET  /health             → {"status": "ok", ...}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from manifesto.api.routes.compliance import router as compliance_router
from manifesto.api.routes.diagnostics import router as diagnostics_router
from manifesto.api.routes.enforce import router as enforce_router
from manifesto.api.routes.health import router as health_router
from manifesto.api.routes.manifesto import router as manifesto_router
from manifesto.api.routes.metrics import router as metrics_router
from manifesto.config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("manifesto")

app = FastAPI(
    title="Manifesto Enforcer",
    description="Compiles development manifestos and enforces them on code and workflow actions",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(manifesto_router)
app.include_router(compliance_router)
app.include_router(diagnostics_router)
app.include_router(enforce_router)
app.include_router(metrics_router)


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may carry exception instances that are not JSON serializable
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8', errors='replace')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(exc), "body": body.decode("utf-8", errors="replace")[:100]},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
