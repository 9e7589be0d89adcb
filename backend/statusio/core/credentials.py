"""
Jeu d'identifiants fourni par l'appelant.

La configuration arrive sous forme de dict ou de chaîne JSON (clés du
manifeste: rd_token, ad_key, pm_key, ...). Chaque identifiant vide retombe
sur la variable d'environnement correspondante.
"""
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .config import (
    DEFAULT_CACHE_MINUTES,
    DEFAULT_DEBRID_LINK_ENDPOINT,
    PROVIDER_TAGS,
    Settings,
    settings as default_settings,
)

logger = logging.getLogger(__name__)


def normalize_cache_minutes(value: Any) -> int:
    """
    Valide la durée de cache en minutes.
    Entier >= 1; 45 par défaut si absent, non numérique ou non fini.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_CACHE_MINUTES
    try:
        minutes = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_CACHE_MINUTES
    if not math.isfinite(minutes):
        return DEFAULT_CACHE_MINUTES
    return max(1, int(minutes))


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on", "oauth")
    return bool(value)


@dataclass(frozen=True)
class CredentialSet:
    """Identifiants par provider + options spécifiques (Premiumize, Debrid-Link)."""
    rd_token: str = ""
    ad_key: str = ""
    pm_key: str = ""
    pm_use_oauth: bool = False
    tb_token: str = ""
    dl_key: str = ""
    dl_auth: str = "Bearer"
    dl_endpoint: str = DEFAULT_DEBRID_LINK_ENDPOINT
    cache_minutes: int = DEFAULT_CACHE_MINUTES

    @classmethod
    def from_config(
        cls,
        raw: Union[str, Dict[str, Any], None],
        env: Optional[Settings] = None,
    ) -> "CredentialSet":
        """
        Construit le jeu d'identifiants depuis la config brute de l'appelant.

        Args:
            raw: dict ou chaîne JSON (JSON invalide = config vide)
            env: Settings de repli (variables d'environnement)
        """
        env = env or default_settings
        cfg: Dict[str, Any] = {}

        if isinstance(raw, str):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("⚠️ Config JSON invalide, utilisation d'une config vide")
                parsed = {}
            cfg = parsed if isinstance(parsed, dict) else {}
        elif isinstance(raw, dict):
            cfg = raw

        pm_oauth = cfg.get("pm_oauth")

        return cls(
            rd_token=_clean(cfg.get("rd_token")) or _clean(env.rd_token),
            ad_key=_clean(cfg.get("ad_key")) or _clean(env.ad_key),
            pm_key=_clean(cfg.get("pm_key")) or _clean(env.pm_key),
            pm_use_oauth=_as_bool(pm_oauth) if pm_oauth not in (None, "") else env.pm_use_oauth,
            tb_token=_clean(cfg.get("tb_token")) or _clean(env.tb_token),
            dl_key=_clean(cfg.get("dl_key")) or _clean(env.dl_key),
            dl_auth=_clean(cfg.get("dl_auth")) or _clean(env.dl_auth) or "Bearer",
            dl_endpoint=_clean(cfg.get("dl_endpoint")) or _clean(env.dl_endpoint) or DEFAULT_DEBRID_LINK_ENDPOINT,
            cache_minutes=normalize_cache_minutes(
                cfg.get("cache_minutes", env.cache_minutes)
            ),
        )

    def credential_for(self, tag: str) -> str:
        """Identifiant (nettoyé) d'un provider par son tag."""
        return {
            "rd": self.rd_token,
            "ad": self.ad_key,
            "pm": self.pm_key,
            "tb": self.tb_token,
            "dl": self.dl_key,
        }[tag].strip()

    def enabled(self) -> Dict[str, bool]:
        """Map tag -> activé (identifiant non vide)."""
        return {tag: bool(self.credential_for(tag)) for tag in PROVIDER_TAGS}

    @property
    def ttl_seconds(self) -> int:
        return normalize_cache_minutes(self.cache_minutes) * 60
