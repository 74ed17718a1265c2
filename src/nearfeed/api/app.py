# src/nearfeed/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and CORS policy for the mobile/web clients.
Business logic lives in `nearfeed.api.routes` and `nearfeed.nearby`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from nearfeed.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="NearFeed API", version="0.1.0")

# CORS (dev-friendly): allow local frontends (e.g. the Expo web dev server) to call this API.
# Configure via env:
# - NEARFEED_CORS_ORIGINS="http://localhost:8081,http://127.0.0.1:8081"
# - NEARFEED_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("NEARFEED_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("NEARFEED_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local and not cors_origins else ""
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

app.include_router(router)
