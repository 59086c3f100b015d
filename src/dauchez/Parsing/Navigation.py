"""Navigation préalable à la liste des opérations.

Le serveur ne renvoie la liste qu'après le passage par la page du compte,
la page de situation et le chargement de l'encart.
"""
import httpx
from loguru import logger

from dauchez.erreurs import VendorDownError

from .Session import SessionClient
from .constants import HEADERS_XHR, MODE_BRUT, URL_COMPTE, URL_ENCART, URL_SITUATION

logger = logger.bind(type_log="NAVIGATION")

# (url, méthode, en-têtes) dans l'ordre imposé par le serveur
ETAPES_PREPARATION = (
    (URL_COMPTE, "GET", None),
    (URL_SITUATION, "GET", None),
    (URL_ENCART, "POST", HEADERS_XHR),
)


async def prime_session(session: SessionClient) -> None:
    """
    Enchaîne les requêtes qui préparent l'état de session côté serveur.

    Le contenu des réponses est ignoré, seul le succès HTTP compte.

    Raises:
        VendorDownError: dès la première étape en échec
    """
    for url, methode, headers in ETAPES_PREPARATION:
        try:
            await session.request(url, method=methode, headers=headers, parse=MODE_BRUT)
        except httpx.HTTPError as e:
            logger.error(f"Étape {methode} {url} en échec : {e}")
            raise VendorDownError() from e
        logger.info(f"Étape {methode} {url} effectuée")
