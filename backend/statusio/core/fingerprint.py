"""
Empreinte de cache dérivée des identifiants.
Deux jeux d'identifiants différents ne partagent jamais la même entrée,
et aucun secret brut n'apparaît dans la clé.
"""
from .config import PROVIDER_TAGS
from .credentials import CredentialSet

REDACTION_MARK = "…"

# En dessous, on ne garde qu'un caractère de chaque côté
SHORT_SECRET_LENGTH = 8


def redact(secret: str) -> str:
    """Masque le milieu d'un secret: 'abcd…wxyz'. '(none)' si vide."""
    secret = (secret or "").strip()
    if not secret:
        return "(none)"
    if len(secret) <= SHORT_SECRET_LENGTH:
        return f"{secret[:1]}{REDACTION_MARK}{secret[-1:]}"
    return f"{secret[:4]}{REDACTION_MARK}{secret[-4:]}"


def build_fingerprint(credentials: CredentialSet) -> str:
    """
    Construit la clé de cache.

    Format: "rd,tb|rd:abcd…wxyz|ad:(none)|pm:(none):apikey|tb:...|dl:(none):Bearer:<endpoint>"
    """
    enabled = credentials.enabled()
    segments = [",".join(tag for tag in PROVIDER_TAGS if enabled[tag])]

    for tag in PROVIDER_TAGS:
        segment = f"{tag}:{redact(credentials.credential_for(tag))}"
        if tag == "pm":
            segment += ":access_token" if credentials.pm_use_oauth else ":apikey"
        elif tag == "dl":
            segment += f":{credentials.dl_auth}:{credentials.dl_endpoint}"
        segments.append(segment)

    return "|".join(segments)
