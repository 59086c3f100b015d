"""Package d'accès HTTP à l'extranet Dauchez.

Ce package regroupe les étapes réseau du connecteur :
- Session : client HTTP avec cookies partagés
- Authentification : connexion
- Navigation : préparation de la session côté serveur
- Liste_Factures : récupération du tableau des opérations
- Telechargement : flux des PDF et noms de fichiers
"""
from .Session import SessionClient
from .Enveloppe import unwrap_envelope
from .Authentification import authenticate
from .Navigation import prime_session
from .Liste_Factures import fetch_listing
from .Telechargement import FluxDocument, build_filename, fetch_artifact

__all__ = [
    "SessionClient",
    "unwrap_envelope",
    "authenticate",
    "prime_session",
    "fetch_listing",
    "FluxDocument",
    "build_filename",
    "fetch_artifact",
]
