"""Настройки приложения, собранные из переменных окружения и файла .env."""

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

DEFAULT_JWT_SECRET = "Secret"
DEFAULT_PORT = 3000


class Settings(BaseModel):
    """
    Конфигурация сервиса. Создаётся один раз при старте и хранится в app.state.

    Атрибуты:
        jwt_secret (str): Секрет для подписи токенов. Значение по умолчанию небезопасно.
        host (str): Адрес, на котором слушает сервер.
        port (int): Порт сервера. Значение по умолчанию годится только для разработки.
        database_url (str): URL базы данных в формате SQLAlchemy.
        redis_url (str | None): URL Redis для кэша публичных ссылок. Если не задан, кэш отключён.
        share_cache_ttl (int): Время жизни записи кэша в секундах.
        token_expire_minutes (int | None): Срок жизни токена. None или 0 означает бессрочный токен.
        log_level (str): Уровень логирования.
        cors_origins (list[str]): Разрешённые источники для CORS.
    """

    jwt_secret: str = DEFAULT_JWT_SECRET
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    database_url: str = "sqlite:///./brainly.db"
    redis_url: str | None = None
    share_cache_ttl: int = 3600
    token_expire_minutes: int | None = None
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        values = {}
        env_map = {
            "JWT_PASSWORD": "jwt_secret",
            "HOST": "host",
            "PORT": "port",
            "DATABASE_URL": "database_url",
            "REDIS_URL": "redis_url",
            "SHARE_CACHE_TTL": "share_cache_ttl",
            "TOKEN_EXPIRE_MINUTES": "token_expire_minutes",
            "LOG_LEVEL": "log_level",
        }
        for env_name, field in env_map.items():
            value = os.getenv(env_name)
            if value:
                values[field] = value

        origins = os.getenv("CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [origin.strip() for origin in origins.split(",") if origin.strip()]

        return cls(**values)
