# Request body for the CFM buscar_medicos endpoint
import json

from cfm.base import SearchCriteria
from cfm.constants import PAGE_SIZE


def build_payload(criteria: SearchCriteria) -> str:
    """Build the JSON body matching the portal's search form exactly.

    The API wants every filter key present, so the ones we don't expose are
    sent empty. Expects already-validated criteria.
    """
    payload = [
        {
            "medico": {
                "nome": criteria.name or "",
                "ufMedico": criteria.state,
                "crmMedico": criteria.crm or "",
                "municipioMedico": "",
                "tipoInscricaoMedico": "",
                "situacaoMedico": "",
                "detalheSituacaoMedico": "",
                "especialidadeMedico": "",
                "areaAtuacaoMedico": "",
            },
            "page": 1,
            "pageNumber": 1,
            "pageSize": PAGE_SIZE,
        }
    ]
    return json.dumps(payload, ensure_ascii=False)
