"""
API entry point: champagne panel layout.
Run: uvicorn main:app --reload --port 8000
"""
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from backend/, the repo root, or cwd so CHAMPAGNE_* settings are visible
_backend_dir = Path(__file__).resolve().parent
load_dotenv(_backend_dir / ".env")
load_dotenv(_backend_dir.parent / ".env")
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from champagne.api.panels import router as panels_router
from champagne.config import VERSION, get_settings
from champagne.logging_config import setup_logging

settings = get_settings()
setup_logging(getattr(logging, settings.log_level), settings.log_file)

app = FastAPI(
    title="Champagne API",
    description="Perforated panel hole layout: grid, stepped radii, shuffle, jitter, open-area stats.",
    version=VERSION,
)

# CORS: a drawing frontend on another port calls this API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(panels_router, prefix="/api/panels", tags=["panels"])


@app.get("/health")
def health():
    """Liveness check (CI/CD, Docker)."""
    return {"status": "ok", "version": VERSION}
