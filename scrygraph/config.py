from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "ScryGraph"
    debug: bool = False

    scryfall_api_base: str = "https://api.scryfall.com"
    scryfall_user_agent: str = "ScryGraph/1.0"

    # Scryfall asks for at most 10 requests per second
    scryfall_rate_limit_delay: float = 0.1
    scryfall_timeout: float = 30.0


settings = Settings()
