"""Authentification sur l'extranet.

Le formulaire de connexion passe par un script côté navigateur : on envoie
directement le POST que ce script produit.
"""
import httpx
from loguru import logger

from dauchez.erreurs import LoginFailedError
from dauchez.modeles import AuthResult

from .Enveloppe import unwrap_envelope
from .Session import SessionClient
from .constants import HEADERS_XHR, MODE_BRUT, MODE_JSON, URL_LOGIN

logger = logger.bind(type_log="AUTH")


async def authenticate(session: SessionClient, login: str, password: str) -> AuthResult:
    """
    Effectue la connexion et suit la redirection éventuelle.

    Args:
        session: Session HTTP de l'exécution
        login: Identifiant de connexion
        password: Mot de passe

    Returns:
        AuthResult avec success=True

    Raises:
        LoginFailedError: erreur réseau, statut HTTP en échec, ou drapeaux
            `response` / `flag_login` absents ou faux
    """
    formulaire = {
        "identifiant": login,
        "pwd": password,
        "g-recaptcha-response": "",
        "hid_css": "",
        "isIframe": 0,
    }
    try:
        reponse = await session.request(
            URL_LOGIN,
            method="POST",
            headers=HEADERS_XHR,
            form=formulaire,
            parse=MODE_JSON,
        )
    except httpx.HTTPStatusError as e:
        logger.error(f"Échec de la connexion, code HTTP = {e.response.status_code}")
        raise LoginFailedError() from e
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Échec de la connexion : {e}")
        raise LoginFailedError() from e

    enveloppe = unwrap_envelope(reponse.body)
    if not (enveloppe.response and enveloppe.flag_login):
        logger.error(f'Échec de la connexion, réponse : "{enveloppe.message}"')
        raise LoginFailedError()

    if enveloppe.redirect:
        try:
            await session.request(enveloppe.redirect, parse=MODE_BRUT)
            logger.info(f"Redirection suivie : {enveloppe.redirect}")
        except httpx.HTTPError as e:
            logger.warning(f"Redirection {enveloppe.redirect} en échec, poursuite : {e}")

    return AuthResult(success=True, redirect_path=enveloppe.redirect, message=enveloppe.message)
