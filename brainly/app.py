import logging
from contextlib import asynccontextmanager

import redis
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brainly import __version__
from brainly.core.cache import ShareLinkCache
from brainly.core.config import Settings
from brainly.core.database import Base, create_db_engine, create_session_factory
from brainly.core.errors import register_exception_handlers
from brainly.core.security import TokenService
from brainly.api import auth, content, brain
import brainly.models  # noqa: F401  регистрирует таблицы в Base.metadata

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
WELCOME_MESSAGE = "Welcome to Brainly"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, redis_client: redis.Redis | None = None) -> FastAPI:
    """
    Собирает приложение: настройки, база данных, сервис токенов, кэш и роутеры.

    Args:
        settings (Settings | None): Конфигурация. Если не передана, читается из окружения.
        redis_client (Redis | None): Готовый клиент Redis. Если не передан,
            создаётся по settings.redis_url (или кэш отключается).

    Returns:
        FastAPI: Готовое приложение. Все зависимости лежат в app.state.
    """

    settings = settings or Settings.from_env()

    if settings.uses_default_secret:
        logger.warning("JWT_PASSWORD не задан: используется небезопасный секрет по умолчанию")

    engine = create_db_engine(settings.database_url)
    # Создаем таблицы, если они ещё не созданы
    Base.metadata.create_all(bind=engine)

    owns_redis = redis_client is None and bool(settings.redis_url)
    if owns_redis:
        redis_client = redis.Redis.from_url(settings.redis_url, decode_responses=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # переданный снаружи клиент закрывает тот, кто его создал
        if owns_redis:
            redis_client.close()
        engine.dispose()

    app = FastAPI(title="Brainly API", version=__version__, lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService(settings.jwt_secret, settings.token_expire_minutes)
    app.state.share_cache = ShareLinkCache(redis_client, ttl=settings.share_cache_ttl)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def root():
        return {"message": WELCOME_MESSAGE}

    app.include_router(auth.router, prefix=API_PREFIX, tags=["auth"])
    app.include_router(content.router, prefix=f"{API_PREFIX}/content", tags=["content"])
    app.include_router(brain.router, prefix=f"{API_PREFIX}/brain", tags=["brain"])

    return app


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Brainly API слушает %s:%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
