"""Téléchargement des PDF associés aux opérations.

Le fichier n'est jamais chargé en mémoire : chaque Document porte un
`FluxDocument` qui relaie les octets du serveur au fur et à mesure de leur
lecture par la sauvegarde. La requête GET part à la première lecture, une
seule à la fois puisque la sauvegarde consomme les flux dans l'ordre.
"""
from datetime import datetime
from typing import AsyncIterator, Optional

from loguru import logger

from dauchez.modeles import VENDOR, BillRecord, Document, Metadata

from .Session import SessionClient

logger = logger.bind(type_log="TELECHARGEMENT")


class FluxDocument:
    """Flux asynchrone d'octets d'un PDF, lisible une seule fois.

    Les erreurs httpx (réseau ou statut HTTP) remontent telles quelles au lecteur.
    """

    def __init__(self, session: SessionClient, url: str):
        self.url = url
        self._session = session
        self._consomme = False

    @property
    def consomme(self) -> bool:
        return self._consomme

    def __aiter__(self) -> AsyncIterator[bytes]:
        if self._consomme:
            raise RuntimeError(f"Flux déjà consommé : {self.url}")
        self._consomme = True
        return self._relayer()

    async def _relayer(self) -> AsyncIterator[bytes]:
        async with self._session.stream(self.url) as response:
            response.raise_for_status()
            taille = 0
            async for morceau in response.aiter_bytes():
                taille += len(morceau)
                yield morceau
        logger.debug(f"{self.url} : {taille} octets relayés")

    def __repr__(self) -> str:
        return f"FluxDocument({self.url!r})"


def build_filename(date: datetime, amount: float, vendor_ref: Optional[str] = None) -> str:
    """Nom de fichier déterministe : AAAA-MM-JJ_dauchez_<montant>€[_ref].pdf"""
    suffixe = f"_{vendor_ref}" if vendor_ref else ""
    return f"{date.strftime('%Y-%m-%d')}_{VENDOR}_{amount:.2f}€{suffixe}.pdf"


def fetch_artifact(session: SessionClient, record: BillRecord) -> Document:
    """
    Associe à une opération le flux de son PDF et ses métadonnées.

    Args:
        session: Session HTTP authentifiée
        record: Opération avec un file_url

    Returns:
        Document prêt pour la sauvegarde
    """
    if not record.file_url:
        raise ValueError(f"Opération sans fichier : {record.title}")
    filename = build_filename(record.date, record.amount, record.vendor_ref)
    logger.info(f"Document {filename} <- {record.file_url}")
    return Document(
        date=record.date,
        title=record.title,
        amount=record.amount,
        filename=filename,
        file_content=FluxDocument(session, record.file_url),
        file_url=record.file_url,
        vendor_ref=record.vendor_ref,
        metadata=Metadata(),
    )
