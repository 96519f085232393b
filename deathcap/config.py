"""Engine configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    model_config = {"env_prefix": "DCS_"}

    state_dir: Path = Path("state")
    state_file: str = "game.json"
    default_game_name: str = "Death Cap Saute"
    dice_seed: int | None = None  # fixed seed for reproducible sessions
    log_level: str = "WARNING"

    @property
    def state_path(self) -> Path:
        return self.state_dir / self.state_file


settings = EngineSettings()
