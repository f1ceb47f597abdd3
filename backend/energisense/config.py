"""
Configuration
=============

Application configuration loaded from environment variables.

Every setting has an in-source default so the stack runs out of the box on a
developer machine. The defaults for MONGO_URI, JWT_SECRET and the bootstrap
admin are NOT safe for anything but a local demo - override them in .env.

Author: EnergiSense Team
"""

import os
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    """Read a true/false flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Application configuration loaded from environment variables.

    Environment Variables:
        MONGO_URI: MongoDB connection string
        MONGO_DB_NAME: Database name used when the URI does not name one
        JWT_SECRET: Secret used to sign bearer tokens
        JWT_EXPIRES_HOURS: Token lifetime in hours (default: 5)
        HOST / PORT: Where the API listens (default: 0.0.0.0:5000)
        LATEST_WINDOW: How many readings GET /api/data/latest returns (default: 50)
        OPEN_REGISTRATION: If true, anyone may register a 'user' account.
                           If false (default), registering requires an admin token.
        BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD: Admin seeded on first run
        FRONTEND_URL: URL of the dashboard for CORS
        DATA_API_URL: Base URL the injector and dashboard talk to
        INJECT_INTERVAL: Seconds between injected readings (default: 5)
        DASHBOARD_REFRESH_INTERVAL: Seconds between dashboard polls (default: 5)
        SESSION_FILE: Where the terminal dashboard keeps its session
    """

    # Database
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/energisense_db")
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "energisense_db")

    # Tokens
    JWT_SECRET = os.getenv("JWT_SECRET", "energisense-dev-secret-change-me")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "5"))

    # bcrypt cost factor
    BCRYPT_ROUNDS = 10

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5000"))

    # Query window for GET /api/data/latest
    LATEST_WINDOW = int(os.getenv("LATEST_WINDOW", "50"))

    # Registration policy
    OPEN_REGISTRATION = _env_bool("OPEN_REGISTRATION", False)

    # First-run admin seed
    BOOTSTRAP_ADMIN_EMAIL = os.getenv("BOOTSTRAP_ADMIN_EMAIL", "admin@energisense.local")
    BOOTSTRAP_ADMIN_PASSWORD = os.getenv("BOOTSTRAP_ADMIN_PASSWORD", "admin123")

    # Frontend URL for CORS
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Allowed CORS origins
    CORS_ORIGINS = [
        FRONTEND_URL,
        "http://localhost:5173",    # Vite dev server
        "http://localhost:3000",    # Create React App
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Clients (injector + dashboard)
    DATA_API_URL = os.getenv("DATA_API_URL", "http://localhost:5000")
    INJECT_INTERVAL = int(os.getenv("INJECT_INTERVAL", "5"))
    DASHBOARD_REFRESH_INTERVAL = int(os.getenv("DASHBOARD_REFRESH_INTERVAL", "5"))
    SESSION_FILE = Path(
        os.getenv("SESSION_FILE", str(Path.home() / ".energisense" / "session.json"))
    )
