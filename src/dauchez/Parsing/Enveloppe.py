"""Normalisation des réponses JSON de l'extranet.

Selon les versions du front, le serveur renvoie soit l'objet de réponse à plat,
soit ce même objet emballé dans un champ intermédiaire. Toute la suite du code
ne manipule que l'`Enveloppe` normalisée.
"""
from typing import Any

from loguru import logger

from dauchez.modeles import Enveloppe

logger = logger.bind(type_log="ENVELOPPE")

# Champs d'emballage connus, dans l'ordre de recherche
CHAMPS_EMBALLAGE = ("_root", "data")


def _deballer(raw: Any) -> Any:
    """Retourne l'objet de réponse contenu dans un éventuel emballage."""
    if not isinstance(raw, dict) or "response" in raw:
        return raw
    for cle in CHAMPS_EMBALLAGE:
        interne = raw.get(cle)
        # forme {"_root": {"children": [{...}]}}
        if isinstance(interne, dict) and "response" not in interne:
            enfants = interne.get("children")
            if isinstance(enfants, list) and enfants:
                interne = enfants[0]
        if isinstance(interne, dict):
            logger.debug(f"Réponse emballée dans le champ '{cle}'")
            return interne
    return raw


def unwrap_envelope(raw: Any) -> Enveloppe:
    """
    Normalise une réponse JSON du serveur, emballée ou à plat.

    Les drapeaux ne sont considérés vrais que s'ils valent exactement `true`.

    Args:
        raw: corps JSON décodé

    Returns:
        Enveloppe avec response, flag_login, message, redirect et return_array.
    """
    donnees = _deballer(raw)
    if not isinstance(donnees, dict):
        logger.warning(f"Réponse inattendue du serveur : {repr(donnees)[:200]}")
        return Enveloppe(response=False)

    return_array = donnees.get("returnArray")
    message = donnees.get("message")
    redirect = donnees.get("redirect")
    return Enveloppe(
        response=donnees.get("response") is True,
        flag_login=donnees.get("flag_login") is True,
        message=str(message) if message is not None else None,
        redirect=str(redirect) if redirect else None,
        return_array=return_array if isinstance(return_array, dict) else {},
    )
