# app/main.py
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import ALLOWED_ORIGINS, DEFAULT_HEADERS, SERVICE_NAME, load_upstream_config
from dispute_routes import router as dispute_router
from services.dispute_service import DisputeService


@asynccontextmanager
async def lifespan(app):
    client = httpx.AsyncClient(headers=DEFAULT_HEADERS)
    app.state.dispute_service = DisputeService(load_upstream_config(), client)
    print(f"{SERVICE_NAME} started")
    try:
        yield
    finally:
        await client.aclose()
        app.state.dispute_service = None
        print(f"{SERVICE_NAME} stopped")


app = FastAPI(title="Kleros Dispute Data API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["Content-Type", "mcp-session-id"],
    expose_headers=["Mcp-Session-Id"],
)
app.include_router(dispute_router)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # unknown routes only; explicit 404s raised by handlers keep their detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "message": f"Route {request.method} {request.url.path} not found"},
        )
    return await http_exception_handler(request, exc)


@app.get("/healthz")
def healthz():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
    }
