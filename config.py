from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    firebase_credentials: str = "./firebase.json"
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Leave TOKEN_SECRET unset to use the placeholder "token_<id>" scheme
    token_secret: str = ""
    token_algorithm: str = "HS256"
    token_expire_minutes: int = 60

    default_page_size: int = 10
    max_page_size: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origin_list(self) -> List[str]:
        """CORS_ORIGINS is a comma separated list"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
