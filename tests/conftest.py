"""Faux extranet Dauchez servi par httpx.MockTransport."""
from __future__ import annotations

import os
from typing import Any, Optional

import httpx
import pytest

from dauchez.Parsing.Session import SessionClient

FICHIERS_PAR_DEFAUT = {
    "/Extranet/Document/telecharger/1": b"%PDF-1.4 loyer mars",
    "/Extranet/Document/telecharger/2": b"%PDF-1.4 loyer avril",
}


def load_fixture(name: str) -> str:
    base = os.path.join(os.path.dirname(__file__), "fixtures")
    path = os.path.normpath(os.path.join(base, name))
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class FauxExtranet:
    """Répond aux endpoints de l'extranet et garde la trace des requêtes reçues."""

    def __init__(self) -> None:
        self.requetes: list[httpx.Request] = []
        # réponse de connexion emballée, comme renvoyée par le front actuel
        self.login_body: Any = {
            "_root": {"children": [{"response": True, "flag_login": True, "redirect": "/Extranet/Accueil"}]}
        }
        self.liste_body: Any = {
            "response": True,
            "returnArray": {"contenu": load_fixture("liste_deux_factures.html")},
        }
        self.fichiers: dict[str, bytes] = dict(FICHIERS_PAR_DEFAUT)
        self.statuts: dict[str, int] = {}
        self.pannes: set[str] = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requetes.append(request)
        chemin = request.url.path
        if chemin in self.pannes:
            raise httpx.ConnectError("Connexion refusée", request=request)
        if chemin in self.statuts:
            return httpx.Response(self.statuts[chemin], text="erreur")
        if chemin == "/Login":
            return httpx.Response(
                200,
                json=self.login_body,
                headers={"Set-Cookie": "PHPSESSID=abc123; Path=/"},
            )
        if chemin in ("/Extranet/Accueil", "/Extranet/Compte", "/Extranet/Compte/situation", "/Encart/load"):
            return httpx.Response(200, text="<html><body>ok</body></html>")
        if chemin == "/Extranet/Compte/listSituation":
            return httpx.Response(200, json=self.liste_body)
        if chemin in self.fichiers:
            return httpx.Response(
                200,
                content=self.fichiers[chemin],
                headers={"Content-Type": "application/pdf"},
            )
        return httpx.Response(404, text="introuvable")

    def session(self) -> SessionClient:
        return SessionClient(transport=httpx.MockTransport(self))

    def chemins(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requetes]

    def requete(self, chemin: str) -> Optional[httpx.Request]:
        for r in self.requetes:
            if r.url.path == chemin:
                return r
        return None


@pytest.fixture
def faux_extranet() -> FauxExtranet:
    return FauxExtranet()
