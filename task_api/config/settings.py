"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Optional

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""
    
    # Document store: "memory" or "firestore"
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory").lower()
    STORE_TIMEOUT: float = float(os.getenv("STORE_TIMEOUT", "30"))
    
    # Firestore
    FIRESTORE_PROJECT_ID: str = os.getenv("FIRESTORE_PROJECT_ID", "demo-project")
    FIRESTORE_DATABASE: str = os.getenv("FIRESTORE_DATABASE", "(default)")
    FIRESTORE_EMULATOR_HOST: Optional[str] = os.getenv("FIRESTORE_EMULATOR_HOST", None)
    FIRESTORE_ACCESS_TOKEN: Optional[str] = os.getenv("FIRESTORE_ACCESS_TOKEN", None)
    
    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR", None)
    WEB_HOST: str = os.getenv("WEB_HOST", "0.0.0.0")
    WEB_PORT: int = int(os.getenv("WEB_PORT", "8080"))
    
    @classmethod
    def validate(cls) -> bool:
        """Validate that the configured backend has what it needs"""
        if cls.STORE_BACKEND not in ("memory", "firestore"):
            raise ValueError(
                f"Unknown STORE_BACKEND '{cls.STORE_BACKEND}', expected 'memory' or 'firestore'"
            )
        
        if cls.STORE_BACKEND == "firestore" and not cls.FIRESTORE_EMULATOR_HOST:
            missing = [
                name for name, value in (
                    ("FIRESTORE_PROJECT_ID", cls.FIRESTORE_PROJECT_ID),
                    ("FIRESTORE_ACCESS_TOKEN", cls.FIRESTORE_ACCESS_TOKEN),
                )
                if not value
            ]
            if missing:
                raise ValueError(
                    f"Missing required environment variables: {', '.join(missing)}"
                )
        
        return True


# Global settings instance
settings = Settings()
