import sys
from unittest.mock import AsyncMock, patch

import pytest
from loguru import logger

from dauchez import main as dauchez_main
from dauchez.erreurs import LoginFailedError
from dauchez.logger_config import configurer_logger
from dauchez.modeles import Credentials


@pytest.fixture
def argv(tmp_path, monkeypatch):
    monkeypatch.setattr(
        sys, "argv",
        ["dauchez", "--db-path", str(tmp_path / "f.sqlite"), "--dossier", str(tmp_path / "pdf"), "--no-display"],
    )


def test_main_lance_le_connecteur(argv, tmp_path):
    with patch.object(dauchez_main, "configurer_logger"), \
         patch.object(dauchez_main, "get_credentials", return_value=Credentials("u", "p")), \
         patch.object(dauchez_main, "start", new=AsyncMock(return_value=[])) as start:
        dauchez_main.main()

    credentials, sauvegarde = start.await_args.args
    assert credentials == Credentials("u", "p")
    assert sauvegarde.keywords == {"db_path": str(tmp_path / "f.sqlite"), "dossier": str(tmp_path / "pdf")}


def test_main_sort_en_erreur(argv):
    with patch.object(dauchez_main, "configurer_logger"), \
         patch.object(dauchez_main, "get_credentials", return_value=Credentials("u", "p")), \
         patch.object(dauchez_main, "start", new=AsyncMock(side_effect=LoginFailedError())):
        with pytest.raises(SystemExit) as exc_info:
            dauchez_main.main()
    assert exc_info.value.code == 1


def test_main_configuration_absente(argv):
    with patch.object(dauchez_main, "configurer_logger"), \
         patch.object(dauchez_main, "get_credentials", side_effect=FileNotFoundError(".env")):
        with pytest.raises(SystemExit) as exc_info:
            dauchez_main.main()
    assert exc_info.value.code == 1


def test_configurer_logger_ecrit_le_fichier(tmp_path):
    log_file = tmp_path / "logs" / "dauchez.log"
    try:
        assert configurer_logger(level="DEBUG", log_file=str(log_file)) == str(log_file)
        logger.bind(type_log="TEST").info("message de test")
        logger.info("sans catégorie")
    finally:
        logger.remove()
    contenu = log_file.read_text(encoding="utf-8")
    assert "TEST" in contenu and "message de test" in contenu
    assert "MAIN" in contenu
