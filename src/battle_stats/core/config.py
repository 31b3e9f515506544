from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # DB (saved players)
    database_url: str = Field(
        default="sqlite+pysqlite:///./battle_stats.db",
        validation_alias="DATABASE_URL",
    )
    db_echo: bool = False

    # battle-record API
    battle_api_key: str | None = Field(default=None, repr=False)
    battle_api_base_url: str = "https://api.t1qq.com/api/tool/wzrr/morebattle"

    # hero table
    hero_list_path: str = "heroList.json"

    log_level: str = "INFO"

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_battle_api_key(self) -> str:
        if not self.battle_api_key:
            raise RuntimeError(
                "BATTLE_API_KEY is not set. Set it in the environment or .env file."
            )
        return self.battle_api_key


settings = Settings()
