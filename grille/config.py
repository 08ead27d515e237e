"""Runtime settings from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    grille_log_level: str = "warning"

    # Default RNG seed for randomized center fills (None = fresh entropy)
    grille_seed: int | None = None

    # Poisson-disc grid: side length cap, coarsened beyond this
    poisson_max_grid: int = 100
    # Consecutive failed active-point picks before Poisson sampling gives up
    poisson_failure_budget: int = 2000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
