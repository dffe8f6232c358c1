"""
Application settings.
"""
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Loyverse POS API
    LOYVERSE_ACCESS_TOKEN: str = ""
    LOYVERSE_API_URL: str = "https://api.loyverse.com/v1.0"
    LOYVERSE_TIMEOUT: float = 30.0
    LOYVERSE_PAGE_LIMIT: int = 250

    # Supplementary record store: "firestore" or "sql"
    RECEIPT_STORE_BACKEND: str = "firestore"
    RECEIPTS_COLLECTION: str = "receipts"

    # Firebase service-account JSON, as a single string
    FIREBASE_SERVICE_ACCOUNT: str = ""

    # SQL backend
    DATABASE_URL: str = "sqlite:///./data/loyverse_bridge.db"
    DATA_DIR: str = "./data"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    EXPOSE_ERROR_DETAILS: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    def missing_credentials(self) -> List[str]:
        """Names of required secrets that are not configured."""
        missing = []
        if not self.LOYVERSE_ACCESS_TOKEN:
            missing.append("LOYVERSE_ACCESS_TOKEN")
        if self.RECEIPT_STORE_BACKEND == "sql":
            if not self.DATABASE_URL:
                missing.append("DATABASE_URL")
        elif not self.FIREBASE_SERVICE_ACCOUNT:
            missing.append("FIREBASE_SERVICE_ACCOUNT")
        return missing


settings = Settings()


def get_settings() -> Settings:
    """Settings dependency (overridable in tests)."""
    return settings
