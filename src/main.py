# src/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from src.common.database.database import connect_to_db, close_db_connection
from src.common.config import settings
from src.common.logging_config import setup_logging
from src.common.store.document_store import StoreError
from src.common.utils.global_messages import GlobalMessages
from src.router.routers import include_routers

logger = logging.getLogger(__name__)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await connect_to_db()
    yield
    await close_db_connection()

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="Hospital Core API",
    description="Symptom triage, doctor recommendations and care-team notifications",
    version="1.0.0",
    lifespan=lifespan
)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Primary writes that fail in the store reach the client as 503
@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": GlobalMessages.STORE_UNAVAILABLE})

# Include routers from a separate file
include_routers(app)

# Root endpoint
@app.get("/")
async def root():
    return {"name": app.title, "version": app.version, "status": "ok"}
