from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bursa_signup.auth.revocation import close_redis
from bursa_signup.config import settings
from bursa_signup.middleware.exceptions import register_exception_handlers
from bursa_signup.middleware.security import HTTPSRedirectMiddleware, SecurityHeadersMiddleware
from bursa_signup.routers import auth, catalog, health, submissions, wizard
from bursa_signup.services.bursa_api import create_http_client
from bursa_signup.wizard.registry import WizardRegistry


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.bursa_client = create_http_client()
    app.state.http_client = httpx.AsyncClient(timeout=30.0)
    app.state.wizards = WizardRegistry()
    try:
        yield
    finally:
        await app.state.bursa_client.aclose()
        await app.state.http_client.aclose()
        await close_redis()


app = FastAPI(
    title="Bursa Signup",
    description="Business registration wizard for the Bursa directory",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware (outermost first) ─────────────────────────────
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(HTTPSRedirectMiddleware, force_https=False)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(submissions.router, prefix="/api/submissions", tags=["submissions"])
app.include_router(wizard.router, prefix="/api/wizard", tags=["wizard"])
