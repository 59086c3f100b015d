"""Structures de données manipulées par le connecteur.

- Credentials : identifiants de l'extranet
- Enveloppe : réponse JSON normalisée du serveur (voir Parsing.Enveloppe)
- AuthResult : résultat de l'authentification
- BillRecord : une ligne du tableau des opérations
- Document : une facture prête à être sauvegardée (avec son flux PDF)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

CURRENCY = "€"
VENDOR = "dauchez"
SCHEMA_VERSION = 1


@dataclass(frozen=True)
class Credentials:
    login: str
    password: str

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Credentials":
        """Construit les identifiants depuis un dictionnaire de configuration.

        Accepte indifféremment la clé `login` ou `username`.
        """
        login = fields.get("login") or fields.get("username")
        password = fields.get("password")
        if not login or not password:
            raise ValueError("Identifiants incomplets : 'login' (ou 'username') et 'password' sont requis")
        return cls(login=str(login), password=str(password))

    def __repr__(self) -> str:
        return f"Credentials(login={self.login!r}, password='***')"


@dataclass(frozen=True)
class Enveloppe:
    response: bool
    flag_login: bool = False
    message: Optional[str] = None
    redirect: Optional[str] = None
    return_array: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthResult:
    success: bool
    redirect_path: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class BillRecord:
    """Une opération du tableau de situation du compte.

    Attributes:
        date: minuit UTC du jour de l'opération
        title: libellé tel qu'affiché dans le tableau
        amount: montant en euros
        file_url: lien relatif vers le PDF, None si la ligne n'en a pas
        vendor_ref: référence fournisseur éventuelle (ajoutée au nom de fichier)
    """

    date: datetime
    title: str
    amount: float
    file_url: Optional[str] = None
    vendor_ref: Optional[str] = None


@dataclass(frozen=True)
class Metadata:
    import_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = SCHEMA_VERSION


@dataclass
class Document:
    """Facture enrichie de son fichier, transmise à la sauvegarde.

    `file_content` est un flux asynchrone d'octets consommable une seule fois.
    """

    date: datetime
    title: str
    amount: float
    filename: str
    file_content: Any
    file_url: Optional[str] = None
    vendor_ref: Optional[str] = None
    currency: str = CURRENCY
    vendor: str = VENDOR
    metadata: Metadata = field(default_factory=Metadata)
