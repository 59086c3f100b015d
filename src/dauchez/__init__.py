"""Connecteur pour l'extranet locataire Dauchez : avis d'échéance en PDF."""
from .Konnector import start
from .erreurs import KonnectorError, LoginFailedError, NotExistingDirectoryError, VendorDownError
from .modeles import BillRecord, Credentials, Document

__all__ = [
    "start",
    "KonnectorError",
    "LoginFailedError",
    "NotExistingDirectoryError",
    "VendorDownError",
    "BillRecord",
    "Credentials",
    "Document",
]
