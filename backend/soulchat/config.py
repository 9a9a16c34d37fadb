from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    tavily_api_key: Optional[str] = None
    tavily_search_url: str = "https://api.tavily.com/search"
    search_timeout_seconds: float = 8.0
    search_max_results: int = 3
    search_depth: str = "basic"

    seed_demo_data: bool = True
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
