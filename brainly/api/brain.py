import logging
import secrets
import string

from fastapi import APIRouter, Request, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brainly.core.cache import ShareLinkCache
from brainly.core.database import get_db
from brainly.core.errors import NotFoundError
from brainly.models.content import Content
from brainly.models.share_link import ShareLink
from brainly.models.user import User
from brainly.api.auth import get_current_user
from brainly.api.content import ContentItem

logger = logging.getLogger(__name__)

router = APIRouter()

SHARE_HASH_LENGTH = 10
# без похожих друг на друга символов: 0/O, 1/l/I
SHARE_ALPHABET = "".join(c for c in string.ascii_letters + string.digits if c not in "0O1lI")


class ShareToggle(BaseModel):
    """
    Включение или отключение публичного доступа к коллекции.

    Атрибуты:
        share (bool): True создаёт (или возвращает существующую) ссылку, False удаляет её.
    """

    share: bool


class ShareOut(BaseModel):
    hash: str | None = None
    message: str | None = None


class SharedBrainOut(BaseModel):
    """
    Публичный снимок коллекции. Из данных пользователя отдаётся только username.

    Атрибуты:
        username (str): Имя владельца коллекции.
        content (list[ContentItem]): Закладки владельца.
    """

    model_config = ConfigDict(from_attributes=True)
    username: str
    content: list[ContentItem]


def generate_share_hash(length: int = SHARE_HASH_LENGTH) -> str:
    return "".join(secrets.choice(SHARE_ALPHABET) for _ in range(length))


def get_share_cache(request: Request) -> ShareLinkCache:
    return request.app.state.share_cache


@router.post("/share", response_model=ShareOut, response_model_exclude_none=True)
def set_share_link(
    share_in: ShareToggle,
    db: Session = Depends(get_db),
    cache: ShareLinkCache = Depends(get_share_cache),
    current_user: User = Depends(get_current_user),
):
    """
    Включает или отключает публичную ссылку на коллекцию текущего пользователя.

    Args:
        share_in (ShareToggle): Флаг share.
        db (Session): Сессия базы данных, предоставляемая через зависимость get_db().
        cache (ShareLinkCache): Кэш публичных ссылок.
        current_user (User): Текущий пользователь, полученный через зависимость get_current_user().

    Returns:
        ShareOut: {"hash": ...} при share=true, {"message": "Share link removed"} при share=false.

    - Повторный запрос share=true возвращает уже существующий хэш.
    - share=false выполняется без ошибок, даже если ссылки не было.
    """

    if not share_in.share:
        link = db.query(ShareLink).filter(ShareLink.user_id == current_user.id).first()
        if link:
            cache.forget(link.hash)
            db.delete(link)
            db.commit()
            logger.info("Пользователь %s отключил публичную ссылку", current_user.id)
        return {"message": "Share link removed"}

    existing = db.query(ShareLink).filter(ShareLink.user_id == current_user.id).first()
    if existing:
        return {"hash": existing.hash}

    share_hash = generate_share_hash()
    while db.query(ShareLink.id).filter(ShareLink.hash == share_hash).first():
        share_hash = generate_share_hash()

    db.add(ShareLink(hash=share_hash, user_id=current_user.id))
    try:
        db.commit()
    except IntegrityError:
        # параллельный запрос того же пользователя успел создать ссылку первым
        db.rollback()
        existing = db.query(ShareLink).filter(ShareLink.user_id == current_user.id).first()
        if not existing:
            raise
        return {"hash": existing.hash}

    logger.info("Пользователь %s включил публичную ссылку", current_user.id)
    return {"hash": share_hash}


@router.get("/{share_link}", response_model=SharedBrainOut)
def get_shared_brain(
    share_link: str,
    db: Session = Depends(get_db),
    cache: ShareLinkCache = Depends(get_share_cache),
):
    """
    Публичный просмотр коллекции по хэшу. Аутентификация не требуется.

    Args:
        share_link (str): Хэш из URL.
        db (Session): Сессия базы данных, предоставляемая через зависимость get_db().
        cache (ShareLinkCache): Кэш публичных ссылок.

    Returns:
        SharedBrainOut: username владельца и его закладки.

    - Неизвестный хэш: 400 "Invalid share link".
    - Владелец не найден: 400 "User not found".
    - Запись кэша без строки в share_links считается отозванной ссылкой и удаляется.
    """

    user_id = cache.get_owner(share_link)

    if user_id is not None:
        # кэш может пережить отключение ссылки: строка в базе обязательна
        confirmed = (
            db.query(ShareLink.id)
            .filter(ShareLink.hash == share_link, ShareLink.user_id == user_id)
            .first()
        )
        if not confirmed:
            cache.forget(share_link)
            user_id = None

    if user_id is None:
        link = db.query(ShareLink).filter(ShareLink.hash == share_link).first()
        if not link:
            raise NotFoundError("Invalid share link")
        user_id = link.user_id
        cache.remember(share_link, user_id)

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")

    contents = db.query(Content).filter(Content.user_id == user_id).order_by(Content.id).all()

    return {"username": user.username, "content": contents}
