"""Settings for the mongoquery compiler."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoQuerySettings(BaseSettings):
    """mongoquery configuration settings."""

    # Identity key handling
    VIRTUAL_KEY: str = "id"
    IDENTITY_FIELD: str = "_id"

    # Aggregate placeholders
    AGGREGATE_NAME_LENGTH: int = 8

    # Server-side JavaScript ($function) is required by $regexFor
    SUPPORTS_FUNCTION: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = MongoQuerySettings()
