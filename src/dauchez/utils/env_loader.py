"""
Module utilitaire pour charger le fichier .env de manière robuste.
Supporte l'exécution normale et les exécutables PyInstaller.
"""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger

from dauchez.modeles import Credentials

logger = logger.bind(type_log="ENV")

REQUIRED_VARS = ['login_dauchez', 'password_dauchez']


def get_app_base_path() -> Path:
    """
    Retourne le chemin de base de l'application.
    - Pour un exe PyInstaller: le dossier contenant l'exe
    - Pour une exécution normale: le dossier racine du projet (parent de src/)
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        # remonter depuis src/dauchez/utils jusqu'à la racine
        return Path(__file__).parent.parent.parent.parent


def get_env_file_path() -> Path:
    """
    Retourne le chemin du fichier .env.
    """
    return get_app_base_path() / '.env'


def validate_required_env_vars(required_vars: list[str]) -> tuple[bool, list[str]]:
    """
    Vérifie que toutes les variables d'environnement requises sont présentes.

    Args:
        required_vars: Liste des noms de variables requises.

    Returns:
        Tuple (success, missing_vars) où success est True si toutes les variables
        sont présentes, et missing_vars contient la liste des variables manquantes.
    """
    missing = [var for var in required_vars if not os.getenv(var)]
    return (len(missing) == 0, missing)


def load_and_validate_env(required_vars: list[str] | None = None) -> dict[str, str]:
    """
    Charge le fichier .env et valide les variables requises.

    Sans fichier .env, les variables déjà présentes dans l'environnement
    suffisent.

    Args:
        required_vars: Liste des variables requises. Si None, utilise les
                      identifiants de l'extranet.

    Returns:
        Dictionnaire contenant les variables d'environnement.

    Raises:
        FileNotFoundError: Si le fichier .env n'existe pas et que des variables manquent.
        ValueError: Si des variables requises sont manquantes.
    """
    if required_vars is None:
        required_vars = REQUIRED_VARS

    env_path = get_env_file_path()

    if env_path.exists():
        load_dotenv(env_path)
        logger.info(f"Fichier .env chargé depuis: {env_path}")
    elif not validate_required_env_vars(required_vars)[0]:
        var_examples = '\n'.join(f"  - {var}=VOTRE_VALEUR" for var in required_vars)
        error_msg = (
            f"Fichier .env introuvable!\n"
            f"Chemin attendu: {env_path}\n"
            f"Veuillez créer un fichier .env avec les variables suivantes:\n{var_examples}"
        )
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)
    else:
        logger.info("Pas de fichier .env, utilisation des variables d'environnement")

    success, missing = validate_required_env_vars(required_vars)
    if not success:
        error_msg = (
            f"Variables d'environnement manquantes: {', '.join(missing)}\n"
            f"Veuillez vérifier votre fichier .env à: {env_path}"
        )
        logger.error(error_msg)
        raise ValueError(error_msg)

    return {var: os.environ[var] for var in required_vars}


def get_credentials() -> Credentials:
    """
    Charge et retourne les identifiants de l'extranet.

    Raises:
        FileNotFoundError: Si le fichier .env n'existe pas.
        ValueError: Si des variables requises sont manquantes.
    """
    env_vars = load_and_validate_env()
    return Credentials(
        login=env_vars['login_dauchez'],
        password=env_vars['password_dauchez'],
    )
