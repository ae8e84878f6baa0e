"""
MediServe Backend: API behind the pharmacy owner dashboard.

ARCHITECTURE:
- FastAPI: stock, prescriptions, notifications, profile, analytics
- SQLAlchemy DB: source of truth for all state
- Stock monitor: periodic low-stock / expiry scan (asyncio task)
- Groq LLM: sales-trend summaries only

Notifications are deduplicated by message text per pharmacy: the same
alert is stored once, however many scans observe the condition.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from mediserve.api.routes import auth, profile, stock, prescriptions, notifications, dashboard, analytics
from mediserve.core.config import settings
from mediserve.db.init_db import init_db
from mediserve.agent.stock_monitor import start_stock_monitor, stop_stock_monitor


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
    1. Initialize database tables
    2. Start the stock monitor (if enabled)

    Shutdown:
    1. Stop the stock monitor
    """
    try:
        print("[*] Initializing database...")
        init_db()
        print("[OK] Database initialized")

        if settings.STOCK_MONITOR_ENABLED:
            print("[*] Starting stock monitor...")
            start_stock_monitor()
            print("[OK] Stock monitor started")
        else:
            print("[WARN] Stock monitor disabled")
    except Exception as e:
        print(f"[ERROR] Startup error: {e}")
        import traceback
        traceback.print_exc()

    yield

    try:
        if settings.STOCK_MONITOR_ENABLED:
            stop_stock_monitor()
    except Exception as e:
        print(f"[ERROR] Shutdown error: {e}")


app = FastAPI(
    title="MediServe API",
    description="Pharmacy dashboard: stock, prescriptions, notifications, AI sales trends.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
    ],
    max_age=600,
    expose_headers=["Content-Type", "Content-Disposition"],
)


@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(profile.router, prefix="/profile", tags=["profile"])
app.include_router(stock.router, prefix="/stock", tags=["stock"])
app.include_router(prescriptions.router, prefix="/prescriptions", tags=["prescriptions"])
app.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])


@app.get("/health")
def health():
    return {"status": "ok", "stock_monitor": "enabled" if settings.STOCK_MONITOR_ENABLED else "disabled"}
