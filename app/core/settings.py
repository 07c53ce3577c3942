"""
Core settings and environment variables for Street Dog Alert.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Street Dog Alert"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON
    FIREBASE_STORAGE_BUCKET: Optional[str] = None

    # Mock DB mode for local development without Firebase credentials
    USE_MOCK_DB: bool = False
    MOCK_DB_PATH: str = "./mock_db.json"

    # Notifications for high-severity reports
    # - MAIL_TRANSPORT: "console" (simulated, default), "smtp" or "sendgrid"
    # - NOTIFY_EMAILS: comma separated recipient list
    MAIL_TRANSPORT: str = "console"
    MAIL_FROM: str = "Street Dog Alert <noreply@streetdogalert.org>"
    NOTIFY_EMAILS: str = ""
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SENDGRID_API_KEY: Optional[str] = None
    MAIL_TIMEOUT_SECONDS: float = 10.0
    NOTIFY_MAX_ATTEMPTS: int = 1  # 1 = single attempt, no retry

    # Optional status allow-list, JSON object: {"pending": ["in-progress", ...], ...}
    # Unset means any status may move to any other status.
    STATUS_TRANSITIONS: Optional[str] = None

    # Photo uploads: "local" (UPLOAD_DIR) or "firebase" (FIREBASE_STORAGE_BUCKET)
    PHOTO_STORAGE: str = "local"
    UPLOAD_DIR: str = "./uploads"
    MAX_PHOTOS_PER_REPORT: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"  # Allow extra env vars to prevent crashes

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def notify_recipients(self) -> List[str]:
        return [e.strip() for e in self.NOTIFY_EMAILS.split(",") if e.strip()]


# Global settings instance
settings = Settings()
