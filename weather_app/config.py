import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CITY = "Moscow"
DEFAULT_PORT = 8080


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    weather_api_key: str = Field(default="", alias="WEATHER_API_KEY")
    weather_city: str = Field(default=DEFAULT_CITY, alias="WEATHER_CITY")
    weather_api_url: str = Field(
        default="http://api.openweathermap.org/data/2.5/weather",
        alias="WEATHER_API_URL",
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=DEFAULT_PORT, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("weather_api_key", mode="before")
    @classmethod
    def _strip_key(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("weather_city", mode="before")
    @classmethod
    def _blank_city_means_default(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return DEFAULT_CITY
        return value

    @field_validator("port", mode="before")
    @classmethod
    def _blank_port_means_default(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return DEFAULT_PORT
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            level = value.strip().upper()
            return level if isinstance(logging.getLevelName(level), int) else "INFO"
        return value

    @property
    def has_api_key(self) -> bool:
        return bool(self.weather_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
