from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./talenthub.db"

    # Public origin used to build an assessment's shareable link
    SHAREABLE_LINK_BASE: str = "https://talenthub.com"

    RETRY_MAX_ATTEMPTS: int = 3
    RETRY_BASE_DELAY: float = 1.0
    RETRY_BACKOFF_MULTIPLIER: float = 2.0

    SEED_ON_EMPTY: bool = True
    SEED_CANDIDATE_COUNT: int = 1000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def shareable_link(self, assessment_id: str) -> str:
        """
        Link handed to candidates. Computed once when an assessment is created.
        """
        return f"{self.SHAREABLE_LINK_BASE.rstrip('/')}/assessment/{assessment_id}"


settings = Settings()
