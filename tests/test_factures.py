import os
from datetime import datetime, timezone

import pytest
from selectolax.parser import HTMLParser

from dauchez.Traitement import Factures as tf
from dauchez.modeles import Document


def load_fixture(name: str) -> str:
    base = os.path.join(os.path.dirname(__file__), "fixtures")
    path = os.path.normpath(os.path.join(base, name))
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class TestParseDate:
    """Tests pour parse_date()."""

    def test_minuit_utc(self):
        d = tf.parse_date("05/03/2021")
        assert d == datetime(2021, 3, 5, tzinfo=timezone.utc)
        assert d.isoformat() == "2021-03-05T00:00:00+00:00"

    @pytest.mark.parametrize("texte,attendu", [
        ("31/12/1999", (1999, 12, 31)),
        ("29/02/2024", (2024, 2, 29)),
        ("01/01/2030", (2030, 1, 1)),
    ])
    def test_composantes_conservees(self, texte, attendu):
        d = tf.parse_date(texte)
        assert (d.year, d.month, d.day) == attendu
        assert (d.hour, d.minute, d.second) == (0, 0, 0)

    def test_espaces_autour(self):
        assert tf.parse_date("  05/03/2021\n") == datetime(2021, 3, 5, tzinfo=timezone.utc)

    def test_format_invalide(self):
        with pytest.raises(ValueError):
            tf.parse_date("2021-03-05")


class TestParseAmount:
    """Tests pour parse_amount()."""

    def test_separateur_milliers(self):
        assert tf.parse_amount("1 234,56") == pytest.approx(1234.56)

    def test_zero(self):
        assert tf.parse_amount("0,00") == 0.0

    def test_espace_insecable(self):
        assert tf.parse_amount("12\u00a0345,10") == pytest.approx(12345.10)

    def test_negatif(self):
        assert tf.parse_amount("-45,20") == pytest.approx(-45.20)

    def test_symbole_en_fin(self):
        assert tf.parse_amount("650,00 €") == pytest.approx(650.0)

    def test_illisible(self):
        with pytest.raises(ValueError):
            tf.parse_amount("")


def test_extract_records_ordre_et_liens():
    """Une opération par ligne de données, dans l'ordre, en-tête et total exclus."""
    arbre = HTMLParser(load_fixture("liste_situation.html"))
    factures = tf.extract_records(arbre)

    assert len(factures) == 3
    assert [f.title for f in factures] == [
        "Avis d'échéance mars 2021",
        "Régularisation charges 2020",
        "Avis d'échéance avril 2021",
    ]
    assert factures[0].date == datetime(2021, 3, 5, tzinfo=timezone.utc)
    assert factures[0].amount == pytest.approx(1234.56)
    assert factures[0].file_url == "/Extranet/Document/telecharger/101"
    # pas de lien dans la 6e colonne
    assert factures[1].file_url is None
    assert factures[2].amount == 0.0
    assert factures[2].file_url == "/Extranet/Document/telecharger/102"


def test_extract_records_ligne_mal_formee_ignoree():
    html = """
    <table><tbody>
      <tr><th>Date</th></tr>
      <tr><td>pas une date</td><td></td><td>X</td><td>10,00</td><td></td><td></td></tr>
      <tr><td>02/02/2022</td><td></td><td>Y</td><td>20,00</td><td></td><td></td></tr>
      <tr><td>Total</td></tr>
    </tbody></table>
    """
    factures = tf.extract_records(HTMLParser(html))
    assert [f.title for f in factures] == ["Y"]


def test_extract_records_tableau_vide():
    assert tf.extract_records(HTMLParser("<div>aucune opération</div>")) == []
    assert tf.extract_records(HTMLParser("<table><tr><th>a</th></tr><tr><td>b</td></tr></table>")) == []


def test_row_to_record_lien_hors_span_ignore():
    html = """
    <table><tbody><tr>
      <td>05/03/2021</td><td>Appel</td><td> Loyer </td><td>650,00</td><td></td>
      <td><a href="/direct">PDF</a></td>
    </tr></tbody></table>
    """
    ligne = HTMLParser(html).css_first("tr")
    brut = tf.row_to_record(ligne)
    assert brut.date == "05/03/2021"
    assert brut.title == "Loyer"
    assert brut.amount == "650,00"
    assert brut.file_url is None


def test_afficher_factures(capsys):
    doc = Document(
        date=datetime(2021, 3, 5, tzinfo=timezone.utc),
        title="Loyer",
        amount=650.0,
        filename="2021-03-05_dauchez_650.00€.pdf",
        file_content=None,
    )
    tf.afficher_factures([doc])
    sortie = capsys.readouterr().out
    assert "Loyer" in sortie
    assert "2021-03-05" in sortie
