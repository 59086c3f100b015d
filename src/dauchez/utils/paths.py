"""Utilitaires pour gérer les chemins de fichiers de manière portable.

Ce module fournit des fonctions pour déterminer les chemins corrects
que ce soit en mode développement ou depuis un bundle PyInstaller.

En mode PyInstaller (--onefile), les données persistantes (DB, logs, PDF)
doivent être stockées dans le répertoire de l'exécutable.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path


def is_pyinstaller_bundle() -> bool:
    """Vérifie si on s'exécute depuis un bundle PyInstaller."""
    return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


def get_app_dir() -> Path:
    """Retourne le répertoire de l'application.

    - En mode PyInstaller: répertoire contenant l'exe
    - En mode développement: répertoire src/dauchez
    """
    if is_pyinstaller_bundle():
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent.parent


def get_data_dir() -> Path:
    """Retourne le répertoire pour les données persistantes (DB, logs, PDF).

    Ce répertoire est créé s'il n'existe pas.
    """
    data_dir = get_app_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def _depuis_env(variable: str) -> Path | None:
    env_path = os.getenv(variable)
    if not env_path:
        return None
    return Path(env_path)


def get_db_path(db_name: str = "factures.sqlite") -> Path:
    """Retourne le chemin complet vers la base de données.

    Args:
        db_name: Nom du fichier de base de données (défaut: factures.sqlite)

    Returns:
        Chemin vers le fichier DB dans le sous-dossier BDD/, ou DAUCHEZ_DB_PATH
    """
    path = _depuis_env("DAUCHEZ_DB_PATH")
    if path:
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
    db_dir = get_data_dir() / "BDD"
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / db_name


def get_log_path(log_name: str = "dauchez.log") -> Path:
    """Retourne le chemin complet vers le fichier de log (sous-dossier logs/ ou DAUCHEZ_LOG_FILE)."""
    path = _depuis_env("DAUCHEZ_LOG_FILE")
    if path:
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / log_name


def get_download_dir() -> Path:
    """Retourne le répertoire de destination des PDF (sous-dossier Factures/ ou DAUCHEZ_DOWNLOAD_DIR)."""
    path = _depuis_env("DAUCHEZ_DOWNLOAD_DIR") or get_data_dir() / "Factures"
    path.mkdir(parents=True, exist_ok=True)
    return path
