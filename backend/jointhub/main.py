# jointhub/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tortoise.exceptions import DBConnectionError, OperationalError

from jointhub.config import settings
from jointhub.core.db import init_db, close_db, is_connection_error, is_db_available
from jointhub.core.errors import InvalidInput, JointHubError, Unavailable
from jointhub.core.ratelimit import FixedWindowRateLimiter, RateLimitMiddleware

from jointhub.api.routers import auth, chat, generation

logger = logging.getLogger("uvicorn.error")

# One counter for the whole process
rate_limiter = FixedWindowRateLimiter(max_requests=settings.rate_limit_per_minute, window_seconds=60)


app = FastAPI(title=settings.APP_NAME)

# CORS must stay outermost so 429s carry its headers
app.add_middleware(RateLimitMiddleware, limiter=rate_limiter, prefix="/api/")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    if not settings.gemini_api_key:
        logger.error("[config] GEMINI_API_KEY not set; /api/generate-text will fail")
    if not settings.openai_api_key:
        logger.error("[config] OPENAI_API_KEY not set; /api/generate-image will fail")
    # In dev, create tables directly; otherwise rely on Aerich migrations
    await init_db(generate_schemas=settings.env == "dev")


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


@app.exception_handler(JointHubError)
async def jointhub_error_handler(request: Request, exc: JointHubError):
    if exc.status_code >= 500:
        logger.error("[api] %s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
    else:
        message = None
    return JSONResponse(status_code=400, content=InvalidInput(message).to_body())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("[api] Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


# The database went away after startup
@app.exception_handler(DBConnectionError)
@app.exception_handler(OperationalError)
async def datastore_error_handler(request: Request, exc: Exception):
    if not is_connection_error(exc):
        return await unexpected_error_handler(request, exc)
    logger.error("[db] %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content=Unavailable().to_body())


# REST
app.include_router(auth.router, prefix="/api")
app.include_router(chat.router, prefix="/api")
app.include_router(generation.router, prefix="/api")


@app.get("/healthz")
def healthz():
    return {"ok": True, "database": "connected" if is_db_available() else "disconnected"}


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("jointhub.main:app", host=settings.host, port=settings.port)
