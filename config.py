"""Application configuration via environment variables."""
import secrets
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Algorithm Visualizer"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 5000
    secret_key: str = secrets.token_hex(32)
    log_level: str = "INFO"

    # playback
    default_speed: int = 3

    # operation input
    default_operation_value: int = 42
    min_operation_value: int = 1
    max_operation_value: int = 100

    # execution backend: in-process unless a remote URL is given
    backend_url: Optional[str] = None
    backend_timeout: float = 10.0

    # fixes the sorting demo's bar heights when set
    sorting_seed: Optional[int] = None

    model_config = {"env_prefix": "ALGOVIZ_"}


settings = Settings()
