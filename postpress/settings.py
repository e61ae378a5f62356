from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    POSTS_DIR: str = "_posts"
    OUTPUT_DIR: str = "_site"

    # Site
    BASE_URL: str = ""
    SITE_TITLE: str = "Blog"
    PAGE_SIZE: int = 10

    # Rendering
    MAX_WORKERS: int = 4
    HIGHLIGHT_CODE: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Our own API Key
    POSTPRESS_API_KEY: str = ""

    @property
    def posts_path(self) -> Path:
        return Path(self.POSTS_DIR)

    @property
    def output_path(self) -> Path:
        return Path(self.OUTPUT_DIR)


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
