from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from brainly.core.errors import AuthError

BCRYPT_ROUNDS = 10
ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def dummy_verify_password() -> None:
    # Тратит столько же времени, сколько настоящая проверка хэша
    pwd_context.dummy_verify()


class TokenService:
    """
    Выпуск и проверка подписанных токенов сессии (JWT, HS256).

    Токен не хранится на сервере: вся информация о пользователе
    находится в полезной нагрузке, а подпись защищает её от подмены.

    Атрибуты:
        secret (str): Секрет подписи, общий для всего процесса.
        expire_minutes (int | None): Срок жизни токена. Если не задан, токен бессрочный.
    """

    def __init__(self, secret: str, expire_minutes: int | None = None):
        self.secret = secret
        self.expire_minutes = expire_minutes

    def issue(self, claims: dict) -> str:
        payload = dict(claims)
        if self.expire_minutes:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str | None) -> dict:
        """
        Проверяет токен и возвращает его полезную нагрузку.

        Raises:
            AuthError: токен отсутствует, повреждён, подписан другим секретом,
                просрочен или содержит не словарь.
        """

        if not token:
            raise AuthError()
        try:
            claims = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except jwt.PyJWTError as exc:
            raise AuthError() from exc
        if not isinstance(claims, dict):
            raise AuthError()
        return claims
