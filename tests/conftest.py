"""
Shared fixtures: a raw CFM row and a fake transport.
"""
import pytest


RAW_DOCTOR = {
    "COUNT": "1",
    "SG_UF": "RS",
    "NU_CRM": "43327",
    "NU_CRM_NATURAL": "43327",
    "NM_MEDICO": "NAYHANY SANTOS ARAUJO",
    "COD_SITUACAO": "A",
    "NM_SOCIAL": None,
    "DT_INSCRICAO": "03/03/2017",
    "IN_TIPO_INSCRICAO": "P",
    "TIPO_INSCRICAO": "Principal",
    "SITUACAO": "Regular",
    "ESPECIALIDADE": "&PSIQUIATRIA - RQE Nº: 36584",
    "PRIM_INSCRICAO_UF": "03/03/2017",
    "PERIODO_I": None,
    "PERIODO_F": None,
    "OBS_INTERDICAO": None,
    "NM_INSTITUICAO_GRADUACAO": "UNIVERSIDADE DE CUIABA",
    "DT_GRADUACAO": "2015",
    "ID_TIPO_FORMACAO": "6",
    "NM_FACULDADE_ESTRANGEIRA_GRADUACAO": None,
    "HAS_POS_GRADUACAO": "0",
    "RNUM": "1",
    "SECURITYHASH": "6932e4653adf4df36894760917f1f62d",
}


class FakeClient:
    """Stands in for CFMClient; records bodies and replays a canned answer."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {"status": "sucesso", "dados": []}
        self.error = error
        self.bodies = []
        self.closed = False

    async def post(self, body):
        self.bodies.append(body)
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


@pytest.fixture()
def raw_doctor():
    return dict(RAW_DOCTOR)


@pytest.fixture()
def success_response(raw_doctor):
    return {"status": "sucesso", "dados": [raw_doctor]}
