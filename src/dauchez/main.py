import argparse
import asyncio
import sys
from functools import partial

from loguru import logger

from dauchez.Database.Factures_To_BDD import enregistrer_factures
from dauchez.Konnector import start
from dauchez.Traitement.Factures import afficher_factures
from dauchez.erreurs import KonnectorError
from dauchez.logger_config import configurer_logger
from dauchez.utils.env_loader import get_credentials
from dauchez.utils.paths import get_db_path, get_download_dir

logger = logger.bind(type_log="MAIN")


def main() -> None:
    """
    Point d'entrée principal : connexion à l'extranet, récupération des avis
    d'échéance et sauvegarde des PDF.
    """
    parser = argparse.ArgumentParser(description="Récupération des avis d'échéance Dauchez")
    parser.add_argument("--db-path", type=str, default=None, help="Chemin vers la base de données SQLite")
    parser.add_argument("--dossier", type=str, default=None, help="Répertoire de destination des PDF")
    parser.add_argument("--log-level", type=str, default=None, help="Niveau de log (DEBUG, INFO, ...)")
    parser.add_argument("--no-display", action="store_true", help="Ne pas afficher le tableau récapitulatif")
    args = parser.parse_args()

    configurer_logger(level=args.log_level)
    db_path = args.db_path or str(get_db_path())
    dossier = args.dossier or str(get_download_dir())

    logger.info("Démarrage du connecteur Dauchez")
    try:
        credentials = get_credentials()
    except (FileNotFoundError, ValueError) as exc:
        logger.error(f"Configuration invalide : {exc}")
        sys.exit(1)

    sauvegarde = partial(enregistrer_factures, db_path=db_path, dossier=dossier)
    try:
        documents = asyncio.run(start(credentials, sauvegarde))
    except KonnectorError as exc:
        logger.error(f"Arrêt du connecteur : {exc.code}")
        sys.exit(1)

    if not args.no_display:
        afficher_factures(documents)
    logger.success(f"Traitement terminé : {len(documents)} documents.")


if __name__ == "__main__":
    main()
