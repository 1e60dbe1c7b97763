"""
Engine settings, read from YIELDS_PREVIEW_* environment variables or a .env file.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_uri: Optional[str] = Field(
        default=None,
        description="SQL URI of the rule database, e.g. sqlite:///DebugGameplay.sqlite",
    )
    database_json: Optional[str] = Field(default=None, description="Path to a JSON dump of the rule tables")

    # Whether the player's standing percent bonus multiplies flat amounts at finalization
    apply_player_percent_to_amount: bool = True
    evaluate_owner_requirements: bool = True
    # Raise on malformed modifier arguments instead of skipping the contribution
    strict_arguments: bool = False

    log_level: str = Field(default='WARNING', pattern=r'(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')

    model_config = SettingsConfigDict(
        env_prefix='YIELDS_PREVIEW_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )


settings = Settings()
