# CFM portal constants
import re

# Brazilian state codes (UF) accepted by the CFM search
VALID_STATES: tuple[str, ...] = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO",
    "MA", "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI",
    "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)

# Upstream status discriminator for a successful search
SUCCESS_STATUS = "sucesso"

PORTAL_URL = "https://portal.cfm.org.br"

# The API rejects requests that don't look like the portal's own XHR
API_HEADERS = {
    "Accept": "application/json, text/javascript, */*; q=0.01",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Origin": PORTAL_URL,
    "Referer": PORTAL_URL + "/busca-medicos",
    "X-Requested-With": "XMLHttpRequest",
}

PAGE_SIZE = 100

# "&PSIQUIATRIA - RQE Nº: 36584" -> "36584"
RQE_PATTERN = re.compile(r"RQE\s*N[º°]?:?\s*(\d+)", re.IGNORECASE)

# Leading "&" and trailing " - RQE ..." are dropped, the middle is the name
SPECIALTY_PATTERN = re.compile(r"^&?(.+?)(?:\s*-\s*RQE.*)?$", re.IGNORECASE)
