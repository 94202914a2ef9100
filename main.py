"""
Główny moduł aplikacji FastAPI dla backendu aplikacji bankowej.
Przy starcie inicjalizuje bazę danych, waluty, harmonogram kursów walut i konto administratora.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from bank_app.bootstrap import BootstrapSequencer
from bank_app.config import settings
from bank_app.core.database import SessionLocal, init_db
from bank_app.core.logging_config import setup_logging
from bank_app.core.scheduler import RecurringTask, hourly_in
from bank_app.integrations.exchange_rates import ExchangeRatesClient
from bank_app.services.rate_refresh import CurrencyRateRefresher
from bank_app.api.routes.health import router as health_router
from bank_app.api.routes.currency import router as currency_router
from bank_app.api.routes.users import router as users_router
from bank_app.api.routes.bills import router as bills_router

setup_logging(settings.log_level, settings.log_file)
logger = logging.getLogger("bank_app.main")
access_logger = logging.getLogger("bank_app.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Zarządzanie cyklem życia aplikacji - inicjalizacja i zamknięcie."""
    app.state.ready = False

    # Startup - połączenie z bazą danych (błąd przerywa start)
    init_db()

    client = ExchangeRatesClient(settings.exchange_rates_api_url, settings.exchange_rates_timeout)
    refresher = CurrencyRateRefresher(SessionLocal, client)
    recurring = None
    if settings.rate_refresh_enabled:
        recurring = RecurringTask(
            refresher.refresh_exchange_rates,
            hourly_in(settings.rate_refresh_timezone),
            name="currency-rates",
        )
    sequencer = BootstrapSequencer(
        SessionLocal,
        refresher,
        settings.admin_profile(),
        recurring_refresh=recurring,
        default_currency_id=settings.default_currency_id,
    )
    app.state.refresher = refresher

    try:
        await run_in_threadpool(sequencer.run)
        app.state.ready = True
        logger.info("Application ready", extra={"event": "SYSTEM_BOOT", "host": settings.host, "port": settings.port})
        yield
    finally:
        # Shutdown
        app.state.ready = False
        sequencer.shutdown()
        client.close()


app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan
)

# CORS dla frontendu
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.include_router(health_router)  # /api/health
app.include_router(currency_router)  # /api/currency/*
app.include_router(users_router)  # /api/users/*
app.include_router(bills_router)  # /api/bills/*


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log dostępowy: metoda, ścieżka, status i czas obsługi żądania."""
    start = time.perf_counter()
    response = await call_next(request)
    access_logger.info("HTTP_REQUEST", extra={
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        "src_ip": request.client.host if request.client else None,
    })
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Loguje nieobsłużone wyjątki i zwraca ogólny błąd 500."""
    logger.error("Unhandled error", exc_info=exc, extra={
        "event": "SYSTEM_FAILURE",
        "url": str(request.url),
        "method": request.method,
    })
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    """Strona główna - informacje o API."""
    return {"name": settings.api_title, "version": settings.api_version, "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
