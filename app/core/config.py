import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

# Development key; refused outside development and testing
DEV_ENCRYPTION_KEY = "r7yLMkKPMD1LM3MlBcSNaALS7cNydWEj-m2CYbfY1YI="

class AuthSettings(BaseModel):
    secret_key: str = Field(default=os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD"))
    algorithm: str = Field(default=os.getenv("JWT_ALGORITHM", "HS256"))
    # Claim carrying group membership in tokens issued by the identity provider
    groups_claim: str = Field(default=os.getenv("JWT_GROUPS_CLAIM", "cognito:groups"))
    audience: str = Field(default=os.getenv("JWT_AUDIENCE", ""))

class Config(BaseModel):
    app_name: str = "HR Employee Records"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Auth
    auth: AuthSettings = AuthSettings()

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://localhost:3001,"
                "http://127.0.0.1:3000,http://127.0.0.1:3001",
            ).split(",")
            if o.strip()
        ]
    )

    # Fernet key for bank and tax identifiers stored on Employee records
    encryption_key: str = os.getenv("ENCRYPTION_KEY", DEV_ENCRYPTION_KEY)

    # Dashboard
    new_hire_window_months: int = int(os.getenv("NEW_HIRE_WINDOW_MONTHS", "3"))

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    _critical_missing = []
    if "dev-only" in settings.auth.secret_key:
        _critical_missing.append("SECRET_KEY")
    if settings.encryption_key == DEV_ENCRYPTION_KEY:
        _critical_missing.append("ENCRYPTION_KEY")
    if _critical_missing:
        raise RuntimeError(
            f"FATAL: The following secrets must be set for non-development environments: "
            f"{', '.join(_critical_missing)}. Set them as environment variables."
        )
else:
    if "dev-only" in settings.auth.secret_key:
        _logger.warning("Using insecure default SECRET_KEY, only acceptable in development.")
