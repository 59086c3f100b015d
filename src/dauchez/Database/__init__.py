"""Package de sauvegarde des factures (SQLite + fichiers)."""
from .Factures_To_BDD import (
    verif_repertoire_db,
    verif_presence_db,
    enregistrer_factures,
)

__all__ = [
    "verif_repertoire_db",
    "verif_presence_db",
    "enregistrer_factures",
]
