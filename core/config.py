# core/config.py

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Loads application settings from .env file."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_uri: Optional[str] = None
    mongo_user: Optional[str] = None
    mongo_password: Optional[str] = None
    mongo_host: str = "localhost"
    mongo_port: int = 27017
    mongo_db_name: str = "agrotech"

    # JWT issued by the identity service; we only verify it
    jwt_signing_key: str = "dev-signing-key-change-me"
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"
    correlation_header: str = "X-Correlation-ID"

    @property
    def final_mongo_uri(self) -> str:
        """Constructs safe MongoDB URI from components (preferred) or returns the provided one."""
        if self.mongo_user and self.mongo_password:
            import urllib.parse
            user = urllib.parse.quote_plus(self.mongo_user)
            password = urllib.parse.quote_plus(self.mongo_password)
            return f"mongodb+srv://{user}:{password}@{self.mongo_host}/"

        if self.mongo_uri:
            return self.mongo_uri

        return f"mongodb://{self.mongo_host}:{self.mongo_port}/"

# Create a single, reusable instance of the settings
settings = Settings()
