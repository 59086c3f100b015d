"""Erreurs terminales du connecteur.

Le message d'une erreur est son code (`str(exc) == exc.code`). Le détail
renvoyé par le serveur est uniquement journalisé.
"""

LOGIN_FAILED = "LOGIN_FAILED"
VENDOR_DOWN = "VENDOR_DOWN"
NOT_EXISTING_DIRECTORY = "NOT_EXISTING_DIRECTORY"


class KonnectorError(Exception):
    """Erreur de base, interrompt l'exécution du connecteur."""

    code = "UNKNOWN_ERROR"

    def __init__(self) -> None:
        super().__init__(self.code)


class LoginFailedError(KonnectorError):
    """Connexion refusée ou réponse de connexion invalide."""

    code = LOGIN_FAILED


class VendorDownError(KonnectorError):
    """Le site ne répond pas ou se comporte de façon inattendue."""

    code = VENDOR_DOWN


class NotExistingDirectoryError(KonnectorError):
    """Aucune liste de documents disponible pour ce compte."""

    code = NOT_EXISTING_DIRECTORY
