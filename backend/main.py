"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import auth, banks, home, plaid, transfers
from config import settings
from logging_config import setup_logging
from services.page_cache import PageCache

setup_logging()
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Banking",
    description="Personal banking: bank linking, linked accounts and transfers",
    version="0.1.0",
)
app.state.page_cache = PageCache()

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.split_list(settings.CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth.router)
app.include_router(banks.router)
app.include_router(home.router)
app.include_router(plaid.router)
app.include_router(transfers.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
