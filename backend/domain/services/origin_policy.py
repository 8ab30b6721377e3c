"""Autorisation des domaines d'integration d'un chatbot."""

from typing import Iterable, Optional
from urllib.parse import urlsplit


def normalize_domain(entry: str) -> Optional[str]:
    """
    Ramene une entree de la liste blanche a un nom d'hote en minuscules.

    Accepte "example.com", "https://example.com/path", "example.com:8080"
    ou "*.example.com".
    """
    entry = entry.strip().lower()
    if not entry:
        return None
    if "://" in entry:
        host = urlsplit(entry).hostname
    else:
        host = entry.split("/", 1)[0].split(":", 1)[0]
    if not host:
        return None
    return host.removeprefix("*.").strip(".") or None


def origin_hostname(origin: str) -> Optional[str]:
    try:
        return urlsplit(origin.strip()).hostname
    except ValueError:
        return None


def _same_origin(origin: str, platform_origin: str) -> bool:
    return origin.strip().rstrip("/").lower() == platform_origin.strip().rstrip("/").lower()


def is_origin_authorized(
    origin: Optional[str],
    authorized_domains: Iterable[str],
    platform_origin: str = "",
) -> bool:
    """
    Vrai si une requete venant de `origin` peut utiliser le chatbot.

    - liste blanche vide: tout domaine est accepte;
    - pas d'en-tete Origin (appel serveur a serveur): accepte;
    - l'origine de la plateforme elle-meme (page de test) est toujours acceptee;
    - sinon le nom d'hote doit etre un domaine autorise ou l'un de ses sous-domaines.
    Comparaison insensible a la casse, ports ignores.
    """
    domains = [d for d in (normalize_domain(e) for e in authorized_domains) if d]
    if not domains or not origin:
        return True
    if platform_origin and _same_origin(origin, platform_origin):
        return True

    host = origin_hostname(origin)
    if not host:
        return False
    return any(host == d or host.endswith(f".{d}") for d in domains)
