import logging

import redis

logger = logging.getLogger(__name__)

CACHE_PREFIX = "share:"


class ShareLinkCache:
    """
    Кэш соответствия "публичный хэш -> id владельца" в Redis.

    Кэшируется только владелец ссылки: содержимое всегда читается из базы,
    поэтому публичная страница показывает актуальный набор закладок.
    Если клиент Redis не передан, кэш ничего не делает.
    """

    def __init__(self, client: redis.Redis | None, ttl: int = 3600):
        self.client = client
        self.ttl = ttl

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def get_owner(self, share_hash: str) -> int | None:
        if not self.enabled:
            return None
        try:
            cached = self.client.get(f"{CACHE_PREFIX}{share_hash}")
        except redis.RedisError as exc:
            logger.warning("Кэш недоступен при чтении %s: %s", share_hash, exc)
            return None
        return int(cached) if cached else None

    def remember(self, share_hash: str, user_id: int) -> None:
        if not self.enabled:
            return
        try:
            self.client.setex(f"{CACHE_PREFIX}{share_hash}", self.ttl, user_id)
        except redis.RedisError as exc:
            logger.warning("Кэш недоступен при записи %s: %s", share_hash, exc)

    def forget(self, share_hash: str) -> None:
        if not self.enabled:
            return
        try:
            self.client.delete(f"{CACHE_PREFIX}{share_hash}")
        except redis.RedisError as exc:
            logger.warning("Кэш недоступен при удалении %s: %s", share_hash, exc)
