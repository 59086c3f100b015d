"""Package de traitement du HTML récupéré.

- Factures : extraction des opérations du tableau de situation
"""
from .Factures import (
    parse_date,
    parse_amount,
    row_to_record,
    extract_records,
    afficher_factures,
)

__all__ = [
    "parse_date",
    "parse_amount",
    "row_to_record",
    "extract_records",
    "afficher_factures",
]
