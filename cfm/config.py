# CFM Doctor Lookup — Configuration
import logging
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # CFM portal search endpoint
    CFM_API_URL: str = (
        "https://portal.cfm.org.br/api_rest_php/api/v2/medicos/buscar_medicos"
    )
    CFM_REQUEST_TIMEOUT: float = 30.0  # Seconds, whole request
    CFM_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
