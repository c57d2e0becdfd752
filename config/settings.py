from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Payments Engine"
    LOG_LEVEL: str = "WARNING"  # stderr also carries the failure report

    # Input
    CSV_DELIMITER: str = ","

    # Output: fractional digits rendered per balance column
    AMOUNT_DECIMAL_PLACES: int = 4

    # Ledger: assert available/held/total invariants after every commit
    VERIFY_INVARIANTS: bool = True


settings = Settings()
