import logging

from fastapi import APIRouter, Request, Depends
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brainly.core.database import get_db
from brainly.core.errors import AuthError, ConflictError
from brainly.core.security import TokenService, hash_password, verify_password, dummy_verify_password
from brainly.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "
INCORRECT_CREDENTIALS = "Incorrect credentials"


class UserCreate(BaseModel):
    """
    Класс для регистрации нового пользователя.

    Атрибуты:
        username (str): Имя пользователя (обязательное поле, должно быть уникальным).
        name (str): Отображаемое имя (обязательное поле).
        email (EmailStr): Адрес электронной почты (обязательное поле).
        password (str): Пароль пользователя (обязательное поле).

    model_config:
        Используется ConfigDict с поддержкой создания экземпляров модели из ORM-объектов.
    """

    model_config = ConfigDict(from_attributes=True)
    username: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    """
    Класс для авторизации пользователя.

    Атрибуты:
        username (str): Имя пользователя.
        password (str): Пароль пользователя.
    """

    model_config = ConfigDict(from_attributes=True)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenOut(BaseModel):
    token: str


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def extract_token(request: Request) -> str | None:
    header = request.headers.get(AUTH_HEADER)
    if header and header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip()
    return header


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    Проверяет токен из заголовка Authorization и возвращает текущего пользователя.

    Принимаются оба вида полезной нагрузки: {"id": ...} (вход) и
    {"username": ...} (старые токены регистрации). Пользователь сохраняется
    в request.state.user_id для остальной части запроса.

    Raises:
        AuthError: заголовок отсутствует, токен не прошёл проверку,
            в нём нет id/username или пользователь не найден.
    """

    claims = tokens.verify(extract_token(request))

    user_id = claims.get("id")
    username = claims.get("username")

    user = None
    if user_id is not None:
        # bool тоже int, но идентификатором не является
        if isinstance(user_id, bool) or not isinstance(user_id, (int, str)):
            raise AuthError()
        user = db.query(User).filter(User.id == user_id).first()
    elif username:
        if not isinstance(username, str):
            raise AuthError()
        user = db.query(User).filter(User.username == username).first()

    if not user:
        raise AuthError()

    request.state.user_id = user.id
    return user


@router.post("/signup", response_model=TokenOut)
def signup(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Регистрация нового пользователя.

    Args:
        user_in (UserCreate): username, name, email и password.
        db (Session): Сессия базы данных, предоставляемая зависимостью get_db().
        tokens (TokenService): Сервис выпуска токенов.

    Returns:
        TokenOut: Токен с id и username нового пользователя.

    - Если username уже занят, возвращается 409 "User already exists".
    - Пароль хранится только в виде хэша bcrypt.
    """

    if db.query(User.id).filter(User.username == user_in.username).first():
        logger.info("Регистрация отклонена: имя %s занято", user_in.username)
        raise ConflictError()

    user = User(
        username=user_in.username,
        name=user_in.name,
        email=str(user_in.email),
        password_hash=hash_password(user_in.password),
    )

    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # параллельная регистрация с тем же именем
        db.rollback()
        logger.info("Регистрация отклонена: имя %s занято", user_in.username)
        raise ConflictError() from exc
    db.refresh(user)

    logger.info("Зарегистрирован пользователь %s (id=%s)", user.username, user.id)
    return {"token": tokens.issue({"id": user.id, "username": user.username})}


@router.post("/signin", response_model=TokenOut)
def signin(
    user_in: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Вход пользователя.

    Args:
        user_in (UserLogin): Имя пользователя и пароль.
        db (Session): Сессия базы данных, предоставляемая зависимостью get_db().
        tokens (TokenService): Сервис выпуска токенов.

    Returns:
        TokenOut: Токен, содержащий id пользователя.

    - Для неизвестного пользователя и неверного пароля возвращается одна и та же ошибка 403.
    """

    user = db.query(User).filter(User.username == user_in.username).first()

    if not user or not user.password_hash:
        dummy_verify_password()
        logger.info("Неудачный вход: пользователь %s", user_in.username)
        raise AuthError(INCORRECT_CREDENTIALS)

    if not verify_password(user_in.password, user.password_hash):
        logger.info("Неудачный вход: пользователь %s", user_in.username)
        raise AuthError(INCORRECT_CREDENTIALS)

    return {"token": tokens.issue({"id": user.id})}
