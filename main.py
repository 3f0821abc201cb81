from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from dotenv import load_dotenv
from loguru import logger
import os
import time

# Load environment variables
load_dotenv()

from database.connection import engine, Base
import models  # noqa: F401 - registers every table on Base.metadata
from routes import home, account, events, bookings, reviews, inquiries, admin
from utils.errors import DomainError, GateRedirect
from utils.logger import setup_logging

setup_logging()

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="Smart Events API",
    description="Cultural events: browse, book tickets, review, and manage as admin",
    version="1.0.0"
)

# CORS configuration - restrict to known frontends
allowed_origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001").split(",")
    if origin.strip()
]

# In development, allow localhost with any port
if os.getenv("ENVIRONMENT") == "development":
    allowed_origins.append("http://localhost:*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,  # Session cookie
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


@app.exception_handler(GateRedirect)
async def gate_redirect_handler(request: Request, exc: GateRedirect):
    """Authorization gates answer with a redirect, never an error page"""
    return RedirectResponse(url=exc.location, status_code=303)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.info(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Field-level messages keyed by the submitted field name"""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "__all__"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=422,
        content={"detail": "Validation failed", "code": "VALIDATION_FAILED", "errors": errors},
    )


# Include routers (routes are at root level)
app.include_router(home.router, tags=["Home"])
app.include_router(account.router, tags=["Account"])
app.include_router(events.router, tags=["Events"])
app.include_router(bookings.router, tags=["Bookings"])
app.include_router(reviews.router, tags=["Reviews"])
app.include_router(inquiries.router, tags=["Inquiries"])
app.include_router(admin.router, tags=["Admin"])


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", 8000))
    uvicorn.run("main:app", host=host, port=port, reload=os.getenv("ENVIRONMENT") == "development")
