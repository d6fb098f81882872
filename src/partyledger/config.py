from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(True, alias="LOG_JSON")
    currency_symbol: str = Field("R$", alias="CURRENCY_SYMBOL")
    thousands_separator: str = Field(".", alias="THOUSANDS_SEPARATOR")
    decimal_separator: str = Field(",", alias="DECIMAL_SEPARATOR")
    report_title: str = Field("Resumo da Festa", alias="REPORT_TITLE")
    report_footer: str = Field("Gerado pelo PartyLedger", alias="REPORT_FOOTER")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
