from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trainmice_admin.consts import DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS


@lru_cache()
def get_settings():
    return Settings()


class Settings(BaseSettings):
    API_URL: str = "http://localhost:3000/api"
    API_TOKEN: Optional[str] = None
    TOKEN_FILE: Optional[str] = None
    IS_DEVELOPMENT: bool = False
    APPRISE_CONFIG_FILE: Optional[str] = None
    AVAILABILITY_LOOKAHEAD_MONTHS: int = DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS

    model_config = SettingsConfigDict(
        env_prefix="TRAINMICE_",
        env_file=[find_dotenv("trainmice.env")],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("API_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value[:-1] if value.endswith("/") else value
