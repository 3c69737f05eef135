from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    app_name: str = "WardView"
    environment: str = "dev"

    log_level: str = "INFO"
    # json logs in prod, pretty console output everywhere else
    log_json: bool = False

    fixtures_dir: Path = DATA_DIR

    # multiplier on the simulated per-call store latency, 0 turns it off
    latency_scale: float = 1.0

    model_config = SettingsConfigDict(env_prefix="WARDVIEW_", env_file=".env", extra="ignore")


settings = Settings()
