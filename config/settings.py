from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Pool
    FEE_BPS: int = 30  # fixed for the life of a pool

    # Market: betting window measured from engine start (7 days)
    MARKET_DURATION_SECONDS: int = 7 * 24 * 60 * 60

    # Identities are supplied externally; the engine only compares them
    OWNER_ACCOUNT: str = "owner"
    ORACLE_ACCOUNT: str | None = None

    # App
    APP_NAME: str = "Green/Red Prediction Market"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"


settings = Settings()
