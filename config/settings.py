from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Ingestion
    SAMPLE_BUDGET: int = 10_000  # max snapshots retained per dataset
    INGEST_PROGRESS_EVERY: int = 100_000  # log progress every N rows
    UPLOAD_DIR: str = "uploads"

    # Playback
    PLAYBACK_BASE_INTERVAL_MS: int = 500  # one stride per interval at 1x
    PLAYBACK_TICK_MS: int = 16  # advance loop period (~60 Hz)
    PLAYBACK_JUMP_STEP: int = 100
    PLAYBACK_SPEED_PRESETS: list[float] = [0.5, 1, 2, 4, 10]

    # App
    APP_NAME: str = "Depth Replay"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]


settings = Settings()
