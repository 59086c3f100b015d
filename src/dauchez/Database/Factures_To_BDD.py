"""Module de sauvegarde des factures (fichiers + base SQLite).

Ce module gère :
- La création du répertoire et de la table `facture`
- L'écriture des PDF dans le dossier de téléchargement
- Le dédoublonnage par nom de fichier : un document déjà enregistré dont le
  fichier existe encore n'est pas retéléchargé

Table:
    facture: une ligne par document sauvegardé
"""
import os
import sqlite3
from datetime import timezone
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from dauchez.modeles import Document

logger = logger.bind(type_log="BDD")


def verif_repertoire_db(db_path: str) -> None:
    """
    Vérifie que le répertoire de la base de données SQLite existe.
    Si ce n'est pas le cas, le crée.

    Args:
        db_path (str): Chemin vers la base de données SQLite.
    """
    dir_path = os.path.dirname(db_path)
    if dir_path and not os.path.exists(dir_path):
        logger.warning(f"Le répertoire '{dir_path}' n'existe pas, création en cours.")
        os.makedirs(dir_path)
        logger.success(f"Répertoire '{dir_path}' créé avec succès.")


def verif_presence_db(db_path: str) -> None:
    """
    Crée la table `facture` si elle n'existe pas.

    Args:
        db_path (str): Chemin vers la base de données SQLite.
    """
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS facture (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT NOT NULL UNIQUE,
                date DATE NOT NULL,
                title TEXT,
                amount REAL NOT NULL,
                currency TEXT,
                vendor TEXT,
                vendor_ref TEXT,
                identifiers TEXT,
                content_type TEXT,
                file_path TEXT,
                import_date TEXT,
                version INTEGER
            )
            """
        )
        conn.commit()
        logger.info("Table 'facture' vérifiée/créée.")
    finally:
        conn.close()


def facture_existante(conn: sqlite3.Connection, filename: str, dossier: Path) -> bool:
    """Vrai si le document est déjà en base et que son fichier est présent."""
    row = conn.execute("SELECT file_path FROM facture WHERE filename = ?", (filename,)).fetchone()
    if row is None:
        return False
    return Path(row[0] or dossier / filename).exists()


async def ecrire_fichier(document: Document, chemin: Path) -> int:
    """Écrit le flux du document dans `chemin` et retourne le nombre d'octets.

    Le fichier est d'abord écrit en `.part` puis renommé ; en cas d'erreur
    le fichier partiel est supprimé et l'erreur remonte.
    """
    partiel = chemin.with_name(chemin.name + ".part")
    taille = 0
    try:
        with open(partiel, "wb") as f:
            async for morceau in document.file_content:
                f.write(morceau)
                taille += len(morceau)
        os.replace(partiel, chemin)
    except BaseException:
        partiel.unlink(missing_ok=True)
        raise
    return taille


async def enregistrer_factures(
    documents: Iterable[Document],
    identifiers: Optional[list[str]] = None,
    content_type: Optional[str] = None,
    *,
    db_path: str,
    dossier: str,
) -> int:
    """
    Sauvegarde les documents un par un, dans l'ordre reçu.

    Args:
        documents: Documents produits par le connecteur
        identifiers: Mots-clés de rapprochement bancaire
        content_type: Type MIME des fichiers
        db_path: Chemin vers la base de données SQLite
        dossier: Répertoire de destination des PDF

    Returns:
        Nombre de documents nouvellement sauvegardés.
    """
    verif_repertoire_db(db_path)
    verif_presence_db(db_path)
    dossier_path = Path(dossier)
    dossier_path.mkdir(parents=True, exist_ok=True)
    identifiants = ",".join(identifiers or [])

    nouveaux = 0
    conn = sqlite3.connect(db_path)
    try:
        for document in documents:
            if facture_existante(conn, document.filename, dossier_path):
                logger.info(f"{document.filename} déjà présent, ignoré.")
                continue
            chemin = dossier_path / document.filename
            taille = await ecrire_fichier(document, chemin)
            conn.execute(
                """
                INSERT INTO facture (filename, date, title, amount, currency, vendor, vendor_ref,
                                     identifiers, content_type, file_path, import_date, version)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(filename) DO UPDATE SET
                    file_path = excluded.file_path,
                    import_date = excluded.import_date
                """,
                (
                    document.filename,
                    document.date.strftime("%Y-%m-%d"),
                    document.title,
                    document.amount,
                    document.currency,
                    document.vendor,
                    document.vendor_ref,
                    identifiants,
                    content_type,
                    str(chemin),
                    document.metadata.import_date.astimezone(timezone.utc).isoformat(),
                    document.metadata.version,
                ),
            )
            conn.commit()
            nouveaux += 1
            logger.success(f"{document.filename} sauvegardé ({taille} octets).")
    finally:
        conn.close()
    logger.info(f"{nouveaux} nouveaux documents enregistrés dans la base de données.")
    return nouveaux
