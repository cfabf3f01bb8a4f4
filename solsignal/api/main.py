"""
FastAPI application entry point.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from solsignal import __version__
from solsignal.api.routes import community, echo, health, quickbuy, signals
from solsignal.errors import SolSignalError
from solsignal.utils.constants import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_HEADERS
from solsignal.utils.logging import get_logger
from solsignal.utils.metrics import registry

logger = get_logger(__name__)

app = FastAPI(
    title="SolSignal API",
    description="Solana token signal feed, leaderboard and quick-buy API",
    version=__version__
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    """Answer OPTIONS for any path and put the CORS headers on every response."""
    if request.method == "OPTIONS":
        response = PlainTextResponse("ok")
    else:
        response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


# Error mapping
@app.exception_handler(SolSignalError)
async def solsignal_error_handler(request: Request, exc: SolSignalError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.details}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": str(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(signals.router, prefix="/signals", tags=["Signals"])
app.include_router(quickbuy.router, prefix="/quickbuy", tags=["Quick Buy"])
app.include_router(community.router, tags=["Community"])
app.include_router(echo.router, prefix="/test", tags=["Test"])


@app.get("/metrics")
def metrics():
    """Prometheus metrics."""
    return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "SolSignal API",
        "version": __version__,
        "docs": "/docs"
    }
