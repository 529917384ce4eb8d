import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import get_settings
from src.core.logging_config import setup_logging
from src.core.dependencies import get_scorecard_registry
from src.routers import leads as leads_router
from src.routers import scorecards as scorecards_router

settings = get_settings()

# Configure logging VERY early
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load and validate every scorecard up front so a broken config fails at startup
    registry = get_scorecard_registry()
    logger.info(f"Scorecard service starting with scorecards: {registry.list_slugs()}")
    yield
    logger.info("Scorecard service stopped.")


app = FastAPI(title="Marketing Scorecard Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(scorecards_router.router, prefix="/api", tags=["scorecards"])
app.include_router(leads_router.router, prefix="/api", tags=["leads"])


@app.get("/api/health", tags=["Health Check"])
async def health_check():
    """
    Root endpoint for basic health check.
    """
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    # Better to run with `uvicorn main:app --reload` from the project root directory
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
