"""Orchestration du connecteur Dauchez.

authentification -> préparation de session -> liste -> extraction
-> documents -> sauvegarde. Toute erreur interrompt l'exécution avant la
sauvegarde.
"""
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from dauchez.modeles import VENDOR, Credentials, Document
from dauchez.Parsing.Authentification import authenticate
from dauchez.Parsing.Liste_Factures import fetch_listing
from dauchez.Parsing.Navigation import prime_session
from dauchez.Parsing.Session import SessionClient
from dauchez.Parsing.Telechargement import fetch_artifact
from dauchez.Parsing.constants import CONTENT_TYPE_PDF
from dauchez.Traitement.Factures import extract_records

logger = logger.bind(type_log="KONNECTOR")

# Mots-clés pour rapprocher les factures des opérations bancaires
IDENTIFIERS = [VENDOR]

Sauvegarde = Callable[..., Awaitable[Any]]


async def start(
    credentials: Credentials,
    sauvegarde: Sauvegarde,
    session: Optional[SessionClient] = None,
) -> list[Document]:
    """
    Exécute le connecteur de bout en bout.

    Args:
        credentials: Identifiants de l'extranet
        sauvegarde: Coroutine appelée avec (documents, identifiers=..., content_type=...)
        session: Session existante (sinon une session est créée puis fermée)

    Returns:
        Les documents transmis à la sauvegarde.
    """
    if session is None:
        async with SessionClient() as client:
            return await _executer(client, credentials, sauvegarde)
    return await _executer(session, credentials, sauvegarde)


async def _executer(
    session: SessionClient, credentials: Credentials, sauvegarde: Sauvegarde
) -> list[Document]:
    logger.info("Authentification en cours...")
    await authenticate(session, credentials.login, credentials.password)
    logger.success("Connexion réussie")

    logger.info("Récupération de la liste des documents")
    await prime_session(session)
    arbre = await fetch_listing(session)

    logger.info("Analyse de la liste des documents")
    factures = extract_records(arbre)
    documents = [fetch_artifact(session, facture) for facture in factures if facture.file_url]
    logger.info(f"{len(documents)} documents sur {len(factures)} opérations")

    logger.info("Sauvegarde des documents")
    await sauvegarde(documents, identifiers=IDENTIFIERS, content_type=CONTENT_TYPE_PDF)
    logger.success("Documents sauvegardés")
    return documents
