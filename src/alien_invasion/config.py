"""Runtime configuration for the invasion simulator."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="INVASION_", env_file=".env", extra="ignore")

    app_name: str = "alien-invasion"
    log_level: str = "WARNING"
    default_aliens: int = Field(default=10, ge=1, description="Aliens to unleash when no count is given.")
    default_map_path: str = Field(
        default="maps/world_map",
        description="World map read when no file is given on the command line.",
    )
    max_iterations: int = Field(default=10_000, ge=1, description="Tick budget of a simulation run.")
    seed: int | None = Field(default=None, description="Seed for the random source; unset means nondeterministic.")


settings = Settings()
