from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parâmetros do emissor lidos do ambiente (prefixo NFCE_).

    Dados do emitente, CSC e série nunca vêm daqui: chegam no contexto de emissão.
    """

    model_config = SettingsConfigDict(env_prefix="NFCE_", env_file=".env", extra="ignore")

    log_level: str = Field(default="INFO")
    ver_proc: str = Field(default="NFCePlus_1.0", max_length=20)
    aliquota_tributos_aproximados: Decimal = Field(default=Decimal("0.267"), ge=0, le=1)


@lru_cache
def get_settings() -> Settings:
    return Settings()
