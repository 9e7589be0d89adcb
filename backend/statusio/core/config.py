"""
Configuration centralisée pour Statusio.
Utilise Pydantic Settings pour charger les variables d'environnement.

Les identifiants fournis par l'appelant ont priorité; ces valeurs
servent de repli quand un champ de configuration est vide.
"""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field

# Charger .env depuis le dossier backend
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), '.env'))


DEFAULT_CACHE_MINUTES = 45
DEFAULT_DEBRID_LINK_ENDPOINT = "https://debrid-link.com/api/account/infos"


class Settings(BaseSettings):
    """Configuration globale de l'application."""

    # --- Real-Debrid ---
    rd_token: str = Field(default="", alias="RD_TOKEN")

    # --- AllDebrid ---
    ad_key: str = Field(default="", alias="AD_KEY")

    # --- Premiumize (apikey ou access_token OAuth) ---
    pm_key: str = Field(default="", alias="PM_KEY")
    pm_use_oauth: bool = Field(default=False, alias="PM_USE_OAUTH")

    # --- TorBox ---
    tb_token: str = Field(default="", alias="TB_TOKEN")

    # --- Debrid-Link ---
    dl_key: str = Field(default="", alias="DL_KEY")
    dl_auth: str = Field(default="Bearer", alias="DL_AUTH")
    dl_endpoint: str = Field(default=DEFAULT_DEBRID_LINK_ENDPOINT, alias="DL_ENDPOINT")

    # --- Cache ---
    cache_minutes: int = Field(default=DEFAULT_CACHE_MINUTES, alias="CACHE_MINUTES")

    # --- HTTP ---
    user_agent: str = Field(default="Statusio/1.0", alias="STATUSIO_USER_AGENT")

    # --- Modes ---
    debug: bool = Field(default=False, alias="DEBUG")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Retourne une instance mise en cache des settings."""
    return Settings()


# Instance globale
settings = get_settings()


# Tags des providers, dans l'ordre d'affichage
PROVIDER_TAGS = ("rd", "ad", "pm", "tb", "dl")

PROVIDER_NAMES = {
    "rd": "Real-Debrid",
    "ad": "AllDebrid",
    "pm": "Premiumize",
    "tb": "TorBox",
    "dl": "Debrid-Link",
}
