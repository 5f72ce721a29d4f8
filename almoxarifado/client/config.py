from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    API_URL: str = "http://localhost:3001"
    TIMEOUT: float = 10.0

    # Exportação
    CSV_DELIMITER: str = ";"
    LOCALE: str = "pt_BR"

    # Portão de acesso (conveniência de interface, não é controle de acesso)
    ESTADO_PATH: Path = Path.home() / ".almoxarifado" / "estado.json"
    SENHA_ACESSO: str = "Almo123."
    SENHA_ACESSO_HASH: Optional[str] = None

    class Config:
        env_prefix = "ALMOXARIFADO_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


client_settings = ClientSettings()
