"""Récupération du tableau des opérations (avis d'échéance)."""
import httpx
from loguru import logger
from selectolax.parser import HTMLParser

from dauchez.erreurs import NotExistingDirectoryError, VendorDownError

from .Enveloppe import unwrap_envelope
from .Session import SessionClient
from .constants import FORMULAIRE_LISTE_SITUATION, HEADERS_XHR, MODE_JSON, URL_LISTE_SITUATION

logger = logger.bind(type_log="LISTE")


async def fetch_listing(session: SessionClient) -> HTMLParser:
    """
    Demande la liste filtrée des opérations et retourne le tableau HTML parsé.

    La session doit être authentifiée et préparée (prime_session).

    Returns:
        HTMLParser du fragment `returnArray.contenu`

    Raises:
        VendorDownError: erreur réseau, statut HTTP en échec ou JSON illisible
        NotExistingDirectoryError: le serveur indique `response` différent de true
    """
    try:
        reponse = await session.request(
            URL_LISTE_SITUATION,
            method="POST",
            headers=HEADERS_XHR,
            form=FORMULAIRE_LISTE_SITUATION,
            parse=MODE_JSON,
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Échec de la récupération des documents : {e}")
        raise VendorDownError() from e

    enveloppe = unwrap_envelope(reponse.body)
    if not enveloppe.response:
        logger.error(f'Échec de la récupération des documents, message : "{enveloppe.message}"')
        raise NotExistingDirectoryError()

    contenu = enveloppe.return_array.get("contenu") or ""
    logger.debug(f"Contenu de la liste (trunc) : {repr(contenu)[:500]}")
    return HTMLParser(str(contenu))
