from dauchez.Parsing.Enveloppe import unwrap_envelope


def test_reponse_a_plat():
    env = unwrap_envelope({"response": True, "flag_login": True, "redirect": "/Extranet/Accueil"})
    assert env.response is True
    assert env.flag_login is True
    assert env.redirect == "/Extranet/Accueil"


def test_reponse_emballee_root_children():
    env = unwrap_envelope({"_root": {"children": [{"response": True, "message": "ok"}]}})
    assert env.response is True
    assert env.flag_login is False
    assert env.message == "ok"


def test_reponse_emballee_data():
    env = unwrap_envelope({"data": {"response": True, "returnArray": {"contenu": "<table></table>"}}})
    assert env.response is True
    assert env.return_array == {"contenu": "<table></table>"}


def test_drapeaux_stricts():
    """Seul le booléen true compte comme succès."""
    env = unwrap_envelope({"response": "true", "flag_login": 1})
    assert env.response is False
    assert env.flag_login is False


def test_corps_inattendu():
    env = unwrap_envelope(["pas", "un", "objet"])
    assert env.response is False
    assert env.return_array == {}
    assert unwrap_envelope(None).response is False
