"""Process configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from burako.logic.rng import validate_seed_hex
from burako.logic.settings import GameSettings


class ServerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BURAKO_", env_nested_delimiter="__")

    max_tables: int = Field(default=100, ge=1)
    log_dir: str | None = Field(default="logs/burako", min_length=1)
    rng_seed: str | None = None  # hex seed for reproducible decks, None draws a fresh one

    # game rules, e.g. BURAKO_GAME__HAND_SIZE=11
    game: GameSettings = Field(default_factory=GameSettings)

    @field_validator("rng_seed")
    @classmethod
    def validate_rng_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v
