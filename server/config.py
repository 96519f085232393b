"""Server configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "DCS_SERVER_"}

    templates_dir: str = ""  # empty = bundled server/templates
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = ["http://localhost:8000", "http://127.0.0.1:8000"]
    in_memory: bool = False  # keep game state in memory instead of the state file
    log_level: str = "INFO"


settings = Settings()
