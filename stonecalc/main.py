from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import calculate, history, export

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("stonecalc")

# Create tables (history rows store the full result as JSON)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Stone Pro Calc",
    description="Stone / tile quantity and pricing calculator",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculate.router, prefix="/api")
app.include_router(history.router, prefix="/api")
app.include_router(export.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "stonecalc"}


logger.info(
    "Stone calc ready: murubba=%.6f m2, density=%.2f t/m3, history cap=%d",
    settings.MURUBBA_SQ_M, settings.STONE_DENSITY_T_PER_M3, settings.HISTORY_LIMIT,
)
