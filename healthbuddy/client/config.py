from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HEALTHBUDDY_", env_file=".env", extra="ignore"
    )

    SERVER_URL: str = "http://localhost:5001"

    # How many of the newest activities go into each chat context
    RECENT_ACTIVITY_LIMIT: int = 5

    # Persisted exchanges read back by load_history()
    HISTORY_LIMIT: int = 100


client_settings = ClientSettings()
