import os
import sys
from typing import Optional

from loguru import logger

from dauchez.utils.paths import get_log_path

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | <cyan>{extra[type_log]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> |  "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[type_log]} | {name}: {function}: {line} |  {message}"


def configurer_logger(level: Optional[str] = None, log_file: Optional[str] = None) -> str:
    """Installe les sorties console et fichier (rotation 10 MB).

    Le niveau vient de DAUCHEZ_LOG_LEVEL (INFO par défaut).

    Returns:
        Le chemin du fichier de log utilisé.
    """
    level = (level or os.getenv("DAUCHEZ_LOG_LEVEL", "INFO")).upper()
    log_file = log_file or str(get_log_path("dauchez.log"))

    logger.remove()
    # valeur par défaut pour les messages émis sans bind()
    logger.configure(extra={"type_log": "MAIN"})
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)
    logger.add(
        log_file,
        format=FILE_FORMAT,
        level=level,
        rotation="10 MB",
        retention="1 month",
        compression="zip",
    )
    logger.debug(f"Logger initialisé (level={level}, file={log_file})")
    return log_file
