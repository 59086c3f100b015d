"""Client HTTP de session pour l'extranet.

Un seul `httpx.AsyncClient` par exécution : les cookies reçus sont renvoyés
sur toutes les requêtes suivantes. Aucune nouvelle tentative n'est faite ici,
les erreurs httpx remontent à l'appelant.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
from loguru import logger
from selectolax.parser import HTMLParser

from .constants import BASE_URL, MODE_BRUT, MODE_HTML, MODE_JSON

logger = logger.bind(type_log="SESSION")

MODES = (MODE_HTML, MODE_JSON, MODE_BRUT)


@dataclass(frozen=True)
class Reponse:
    status_code: int
    headers: httpx.Headers
    body: Any


class SessionClient:
    """
    Session HTTP partagée par toutes les étapes du connecteur.

    Exemple:

        async with SessionClient() as session:
            reponse = await session.request("/Login", method="POST", form={...}, parse="json")
            arbre = (await session.request("/Extranet/Compte")).body

    Args:
        base_url: racine du site, les URLs relatives sont résolues contre elle
        parse: mode d'interprétation par défaut ("html", "json" ou "raw")
        transport: transport httpx optionnel (httpx.MockTransport en test)
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        parse: str = MODE_HTML,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if parse not in MODES:
            raise ValueError(f"Mode d'interprétation inconnu : {parse}")
        self.base_url = base_url.rstrip("/")
        self.parse = parse
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "SessionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        form: Optional[dict[str, Any]] = None,
        json: Any = None,
        parse: Optional[str] = None,
    ) -> Reponse:
        """
        Envoie une requête dans la session et interprète le corps de la réponse.

        Raises:
            httpx.HTTPStatusError: statut HTTP hors 2xx
            httpx.TransportError: problème réseau
            ValueError: corps JSON illisible en mode "json"
        """
        mode = parse or self.parse
        if mode not in MODES:
            raise ValueError(f"Mode d'interprétation inconnu : {mode}")
        logger.debug(f"{method} {url} (mode={mode})")
        response = await self._client.request(method, url, headers=headers, data=form, json=json)
        logger.debug(f"{method} {url} -> {response.status_code}")
        response.raise_for_status()
        return Reponse(
            status_code=response.status_code,
            headers=response.headers,
            body=self._interpreter(response, mode),
        )

    def stream(self, url: str):
        """Ouvre un GET en flux binaire, sans interprétation du corps.

        À utiliser comme contexte asynchrone : `async with session.stream(url) as r`.
        """
        logger.debug(f"GET {url} (flux)")
        return self._client.stream("GET", url)

    @staticmethod
    def _interpreter(response: httpx.Response, mode: str) -> Any:
        if mode == MODE_JSON:
            return response.json()
        if mode == MODE_HTML:
            return HTMLParser(response.text)
        return response.content
