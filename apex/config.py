# apex/config.py
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.entities import MAX_TITLE_LENGTH

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./apex.db"  # Default if not in .env

    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    FILES_PATH: Path | None = None  # Will be set based on STORAGE_PATH
    LOGS_PATH: Path | None = None  # Will be set based on STORAGE_PATH

    # Domain limits
    MAX_TITLE_LENGTH: int = MAX_TITLE_LENGTH

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        # Set derived paths if not explicitly provided
        self.FILES_PATH = Path(self.FILES_PATH) if self.FILES_PATH else self.STORAGE_PATH / "files"
        self.LOGS_PATH = Path(self.LOGS_PATH) if self.LOGS_PATH else self.STORAGE_PATH / "logs"

        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.STORAGE_PATH, self.FILES_PATH, self.LOGS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

settings = Settings()
