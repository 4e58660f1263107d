import json

from cfm import SearchCriteria
from cfm.payload import build_payload


def test_payload_shape():
    body = json.loads(build_payload(SearchCriteria(state="RS", crm="43327", name="João")))
    assert isinstance(body, list) and len(body) == 1
    entry = body[0]
    assert entry["page"] == 1
    assert entry["pageNumber"] == 1
    assert entry["pageSize"] == 100
    assert entry["medico"] == {
        "nome": "João",
        "ufMedico": "RS",
        "crmMedico": "43327",
        "municipioMedico": "",
        "tipoInscricaoMedico": "",
        "situacaoMedico": "",
        "detalheSituacaoMedico": "",
        "especialidadeMedico": "",
        "areaAtuacaoMedico": "",
    }


def test_absent_fields_are_sent_empty():
    medico = json.loads(build_payload(SearchCriteria(state="SP")))[0]["medico"]
    assert medico["nome"] == ""
    assert medico["crmMedico"] == ""
    assert medico["ufMedico"] == "SP"


def test_non_ascii_names_are_kept_verbatim():
    assert "João" in build_payload(SearchCriteria(state="SP", name="João"))
