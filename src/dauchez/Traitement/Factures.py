"""Module de traitement du tableau HTML des opérations.

Ce module parse le fragment HTML renvoyé par la liste de situation et extrait :
- La date de l'opération (colonne 1, format JJ/MM/AAAA)
- Le libellé (colonne 3)
- Le montant (colonne 4, virgule décimale)
- Le lien vers le PDF (colonne 6, `span > a[href]`)

La première et la dernière ligne de chaque tableau (en-tête et total) sont ignorées.

Fonctions principales:
    extract_records(): Extrait les BillRecord du tableau, dans l'ordre du tableau
    row_to_record(): Extrait les champs bruts d'une ligne
    afficher_factures(): Affiche les documents dans la console (rich)
"""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from loguru import logger
from rich.console import Console
from rich.table import Table
from selectolax.parser import HTMLParser, Node

from dauchez.modeles import BillRecord, Document

logger = logger.bind(type_log="TRAITEMENT")

# positions des colonnes (1 = première cellule)
COLONNE_DATE = 1
COLONNE_LIBELLE = 3
COLONNE_MONTANT = 4
COLONNE_FICHIER = 6

_NOMBRE_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class RawFields:
    date: str
    title: str
    amount: str
    file_url: Optional[str] = None


def parse_date(texte: str) -> datetime:
    """Convertit une date JJ/MM/AAAA en datetime à minuit UTC.

    Raises:
        ValueError: si le texte ne respecte pas le format
    """
    return datetime.strptime(texte.strip()[:10], "%d/%m/%Y").replace(tzinfo=timezone.utc)


def parse_amount(texte: str) -> float:
    """Convertit un montant affiché ("1 234,56") en float.

    La virgule devient un point et tous les blancs (espaces insécables compris)
    sont supprimés. Comme un parseur numérique tolérant, seul le nombre en tête
    de chaîne est lu : "12,50€" donne 12.5.

    Raises:
        ValueError: si aucun nombre n'est lisible en tête de chaîne
    """
    s_clean = re.sub(r"\s", "", texte.replace(",", ".", 1))
    match = _NOMBRE_RE.match(s_clean)
    if not match:
        raise ValueError(f"Montant illisible : {texte!r}")
    return float(match.group(0))


def _enfants(node: Node, *tags: str) -> list[Node]:
    return [enfant for enfant in node.iter() if enfant.tag in tags]


def _texte(cellules: list[Node], position: int) -> str:
    if len(cellules) < position or cellules[position - 1].tag != "td":
        return ""
    return (cellules[position - 1].text() or "").strip()


def _lien(cellules: list[Node], position: int) -> Optional[str]:
    if len(cellules) < position or cellules[position - 1].tag != "td":
        return None
    for span in _enfants(cellules[position - 1], "span"):
        for lien in _enfants(span, "a"):
            href = lien.attributes.get("href")
            if href:
                return href.strip()
    return None


def row_to_record(ligne: Node) -> RawFields:
    """Extrait les champs bruts d'une ligne `tr` par position de colonne."""
    cellules = _enfants(ligne, "td", "th")
    return RawFields(
        date=_texte(cellules, COLONNE_DATE),
        title=_texte(cellules, COLONNE_LIBELLE),
        amount=_texte(cellules, COLONNE_MONTANT),
        file_url=_lien(cellules, COLONNE_FICHIER),
    )


def selectionner_lignes(arbre: HTMLParser) -> list[Node]:
    """Retourne les lignes de données : chaque tbody sans sa première ni sa dernière ligne."""
    lignes: list[Node] = []
    for tbody in arbre.css("table > tbody"):
        lignes.extend(_enfants(tbody, "tr")[1:-1])
    return lignes


def extract_records(arbre: HTMLParser) -> list[BillRecord]:
    """
    Extrait les opérations du tableau HTML, dans l'ordre d'apparition.

    Les lignes sans lien de fichier sont conservées (file_url=None) ; le filtrage
    se fait au moment du téléchargement. Une ligne dont la date ou le montant
    est illisible est journalisée puis ignorée.

    Parameters:
    - arbre (HTMLParser): Le fragment HTML de la liste de situation.

    Returns:
    - list[BillRecord]: Une opération par ligne de données.
    """
    factures: list[BillRecord] = []
    lignes = selectionner_lignes(arbre)
    logger.debug(f"{len(lignes)} lignes de données trouvées")
    for ligne in lignes:
        brut = row_to_record(ligne)
        logger.debug(f"Ligne extraite : {brut}")
        try:
            factures.append(
                BillRecord(
                    date=parse_date(brut.date),
                    title=brut.title,
                    amount=parse_amount(brut.amount),
                    file_url=brut.file_url,
                )
            )
        except ValueError as e:
            logger.error(f"Erreur : {e}. Ligne mal formatée ou données invalides.")
            continue
    return factures


def afficher_factures(documents: Iterable[Document]) -> None:
    """Affiche les documents récupérés dans un tableau formaté."""
    console = Console()
    table_factures = Table(title="Avis d'échéance Dauchez")
    table_factures.add_column("Date", style="cyan", justify="center")
    table_factures.add_column("Libellé", style="magenta")
    table_factures.add_column("Montant", style="red", justify="right")
    table_factures.add_column("Fichier", style="green")

    for document in documents:
        table_factures.add_row(
            document.date.strftime("%Y-%m-%d"),
            document.title,
            f"{document.amount:.2f} {document.currency}",
            document.filename,
        )

    console.print(table_factures)
