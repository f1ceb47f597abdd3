"""
EnergiSense - Backend API
=========================
FastAPI application for an industrial energy-monitoring dashboard.

ARCHITECTURE:

    [Data Injector] --POST /api/data/inject--> [This Backend] ---> [MongoDB]
                                                     ^
                                                     |  GET /api/data/latest (every 5s)
                                                     |
                                              [Dashboard client]

    Auth (register / login / tokens) and the admin gate sit next to the data
    routes and protect the read side and user management.

HOW TO RUN:
    # Install
    pip install -e .

    # Copy environment config and edit it
    cp env.example.txt .env

    # Run the server
    energisense-api
    # or: uvicorn energisense.main:app --reload --port 5000

    # Feed it data (another terminal)
    energisense-injector

API DOCUMENTATION:
    After starting the server, visit:
    - Swagger UI: http://localhost:5000/docs
    - ReDoc: http://localhost:5000/redoc

Author: EnergiSense Team
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from energisense import __version__
from energisense.config import Config
from energisense.routers import admin_router, auth_router, data_router, set_services
from energisense.services import AccountStore, AuthService, ReadingStore, connect, ping


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    STARTUP:
        1. Connect to MongoDB
        2. Build the stores and the auth service
        3. Ensure indexes and seed the first admin
        4. Inject everything into the routers

    SHUTDOWN:
        1. Detach the routers
        2. Close the MongoDB client
    """
    # ========== STARTUP ==========
    print("=" * 60)
    print("ENERGISENSE - Starting Backend")
    print("=" * 60)

    client, db = connect(Config.MONGO_URI, Config.MONGO_DB_NAME)
    app.state.db = db

    reading_store = ReadingStore(db)
    account_store = AccountStore(db)
    auth_service = AuthService(
        account_store,
        secret=Config.JWT_SECRET,
        expires_hours=Config.JWT_EXPIRES_HOURS,
        bcrypt_rounds=Config.BCRYPT_ROUNDS,
        algorithm=Config.JWT_ALGORITHM,
    )

    # A database that's down at boot must not kill the server
    try:
        reading_store.ensure_indexes()
        account_store.ensure_indexes()
        auth_service.bootstrap_admin(Config.BOOTSTRAP_ADMIN_EMAIL, Config.BOOTSTRAP_ADMIN_PASSWORD)
        print("Database ready")
    except Exception as e:
        print(f"Database not reachable yet: {e}")
        print("Requests will fail with 500 until MongoDB is up")

    set_services(reading_store, account_store, auth_service)

    print(f"   Database: {db.name}")
    print(f"   Query window: {Config.LATEST_WINDOW} readings")
    print(f"   Token lifetime: {Config.JWT_EXPIRES_HOURS} hours")
    print(f"   Open registration: {Config.OPEN_REGISTRATION}")
    print(f"   CORS origins: {len(Config.CORS_ORIGINS)} configured")
    print()
    print(f"API Documentation: http://localhost:{Config.PORT}/docs")
    print("=" * 60)

    yield  # Application runs here

    # ========== SHUTDOWN ==========
    print()
    print("Shutting down...")
    set_services(None, None, None)
    app.state.db = None
    client.close()
    print("Shutdown complete")


# =============================================================================
# CREATE FASTAPI APPLICATION
# =============================================================================

app = FastAPI(
    title="EnergiSense API",
    description="""
## Overview

Backend API for the EnergiSense energy-monitoring dashboard.

## How It Works

1. **Injector posts readings** - `POST /api/data/inject`, no auth
2. **Readings are stored** - one document per reading, server timestamp
3. **Dashboard polls** - `GET /api/data/latest` every 5 seconds with a token

## Authentication

- `POST /api/auth/login` returns a token valid for 5 hours
- Send it as `Authorization: Bearer <token>`
- `/api/admin/*` needs a token with role `admin`
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)
app.state.db = None


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLING
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Bad request bodies are a 400 with a readable message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)

    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(data_router)
app.include_router(auth_router)
app.include_router(admin_router)


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get(
    "/",
    summary="API Information",
    description="Get basic API information and available endpoints."
)
async def root():
    """Root endpoint with API overview."""
    return {
        "name": "EnergiSense API",
        "version": __version__,
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        },
        "endpoints": {
            "inject": "POST /api/data (alias: POST /api/data/inject)",
            "latest": "GET /api/data/latest (token)",
            "register": "POST /api/auth/register",
            "login": "POST /api/auth/login",
            "users": "GET /api/admin/users (admin token)",
        }
    }


@app.get(
    "/health",
    summary="Health Check",
    description="Check if the backend is running and can reach MongoDB."
)
def health():
    """Health check endpoint."""
    if ping(app.state.db):
        return {"status": "healthy", "database": "connected"}
    return JSONResponse(
        status_code=503,
        content={"status": "degraded", "database": "unreachable"},
    )


def run():
    """Entry point for the energisense-api command."""
    uvicorn.run("energisense.main:app", host=Config.HOST, port=Config.PORT)
