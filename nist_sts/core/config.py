from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # ----- APP ENV CONFIG -----
    APP_NAME: str = 'NIST-STS'
    APP_HOST: str = '127.0.0.1'
    APP_PORT: int = 8000

    DEBUG: bool = False

    # ----- LOGGER -----
    # The candidate sequence may be key material, keep it out of request logs
    SENSITIVE_DATA: list[str] = ['sequence']
    LOG_LEVEL: str = 'INFO'
    LOG_TO_FILE: bool = False
    LOG_FORMAT: str = '%(asctime)s | %(levelname)-8s | %(name)s | [%(filename)s:%(funcName)s:%(lineno)d] - %(message)s'
    LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S.%f'

    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    _LOGS_DIR: Path = BASE_DIR / 'logs'

    @property
    def LOGS_DIR(self) -> Path:
        Path.mkdir(self._LOGS_DIR, parents=True, exist_ok=True)
        return self._LOGS_DIR


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # ----- TEST BATTERY -----
    SIGNIFICANCE_LEVEL: float = 0.01
    OVERLAPPING_TEMPLATE_LENGTH: int = 9
    OVERLAPPING_TEMPLATE_BLOCKS: int = 8

    # ----- API -----
    MAX_SEQUENCE_LENGTH: int = 10_000_000


env_config = EnvConfig()
app_config = AppConfig()
