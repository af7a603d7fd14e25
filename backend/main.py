"""
Weekly Credit Scoring API
Team weight configs, performance ratings, weekly scores and quarter reports
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from credit_engine.api import credit_config, reports, weekly_scores
from credit_engine.cache import get_resolver_cache
from credit_engine.config import settings
from credit_engine.db.database import check_engine_connection, engine, init_db
from credit_engine.errors import CreditEngineError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Ensure DB tables exist (safe for dev) - call AFTER all imports to avoid circular deps
init_db()

app = FastAPI(
    title="Weekly Credit Scoring API",
    description="Weekly credit scores (EC/OC/CC), quarter scores and leaderboards",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:8000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

STATUS_BY_KIND = {
    "validation": 400,
    "permission": 403,
    "not_found": 404,
    "conflict": 409,
}


@app.exception_handler(CreditEngineError)
async def credit_engine_error_handler(request: Request, exc: CreditEngineError):
    status = STATUS_BY_KIND.get(exc.kind, 500)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status, content={"detail": exc.message, "error": exc.kind})


app.include_router(credit_config.router)
app.include_router(weekly_scores.router)
app.include_router(reports.router)


@app.get("/")
def root():
    """API basic info"""
    return {
        "message": "Weekly Credit Scoring API is running",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "weights": "/api/credit/weights/{team_id}",
            "ratings": "/api/credit/ratings/{user_id}",
            "weekly_scores": "/api/scores/{user_id}/weeks/{week_id}",
            "summary": "/api/scores/{user_id}/summary",
            "trend": "/api/scores/{user_id}/trend",
            "quarters": "/api/scores/{user_id}/quarters/{year}/{quarter}",
            "leaderboard": "/api/leaderboard",
            "audit": "/api/audit",
        },
    }


@app.get("/health")
def health_check():
    connected = check_engine_connection(engine)
    cache = get_resolver_cache()
    pruned = cache.prune_expired()
    if pruned:
        logger.debug(f"Pruned {pruned} expired resolver cache entries")
    return {
        "status": "healthy" if connected else "degraded",
        "database": "connected" if connected else "unavailable",
        "resolver_cache": cache.stats(),
    }


# Run with:
#   uvicorn main:app --reload --port 8000
