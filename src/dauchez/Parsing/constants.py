"""Constantes pour le module Parsing.

Ce fichier centralise les URLs de l'extranet, les en-têtes et les
formulaires fixes envoyés au serveur.
"""

BASE_URL = "https://extranet.dauchez.fr"

# === Endpoints ===
URL_LOGIN = "/Login"
URL_COMPTE = "/Extranet/Compte"
URL_SITUATION = "/Extranet/Compte/situation"
URL_ENCART = "/Encart/load"
URL_LISTE_SITUATION = "/Extranet/Compte/listSituation"

# Sans cet en-tête le serveur renvoie la page HTML complète au lieu du JSON
HEADERS_XHR = {"X-Requested-With": "XMLHttpRequest"}

# === Modes d'interprétation des réponses ===
MODE_HTML = "html"
MODE_JSON = "json"
MODE_BRUT = "raw"

# Opérations au débit, type "loyer" uniquement, sans borne de date ni de montant
FORMULAIRE_LISTE_SITUATION = {
    "sortCompte": "",
    "titleCompte": "Situation",
    "limitCompte": 0,
    "nom": "",
    "debit": 1,
    "id_libelle_code_collectif": 22,
    "montant_min": "",
    "montant_max": "",
    "date_debut": "",
    "date_fin": "",
    "id_type_collectif[]": 7,
}

CONTENT_TYPE_PDF = "application/pdf"
