import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "127.0.0.1"
    PORT: int = 4000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["http://localhost:4200"]

    DATA_PATH: str = "data/employees.json"
    STORE_LOCK_TIMEOUT: float = 10.0

    API_URL: str = "http://localhost:4000/api"
    CLIENT_TIMEOUT: float = 15.0

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
