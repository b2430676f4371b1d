import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, ConfigDict
from sqlalchemy.orm import Session, joinedload

from brainly.core.database import get_db
from brainly.core.errors import ValidationError
from brainly.models.content import Content
from brainly.models.user import User
from brainly.api.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()

CONTENT_ID_REQUIRED = "Content ID is required"


class ContentCreate(BaseModel):
    """
    Схема для создания новой закладки.

    Атрибуты:
        link (str): Сохраняемая ссылка.
        type (str): Тип материала.
        title (str): Заголовок.
    """

    model_config = ConfigDict(from_attributes=True)
    link: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=255)


class ContentDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    content_id: int | None = Field(None, alias="contentId")


class ContentOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    username: str


class ContentItem(BaseModel):
    """
    Класс для вывода закладки.

    Атрибуты:
        id (int): Уникальный идентификатор закладки.
        link (str): Сохранённая ссылка.
        type (str): Тип материала.
        title (str): Заголовок.
        tags (list[int]): Идентификаторы тегов.
    """

    model_config = ConfigDict(from_attributes=True)
    id: int
    link: str
    type: str
    title: str
    tags: list[int] = []


class ContentOut(ContentItem):
    """Закладка вместе с именем владельца (для GET /content)."""

    owner: ContentOwner


class ContentList(BaseModel):
    content: list[ContentOut]


class MessageOut(BaseModel):
    message: str


@router.post("", response_model=MessageOut)
def create_content(content_in: ContentCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """
    Создает новую закладку текущего пользователя.

    Args:
        content_in (ContentCreate): link, type и title закладки.
        db (Session): Сессия базы данных, предоставляемая через зависимость get_db().
        current_user (User): Текущий пользователь, полученный через зависимость get_current_user().

    Returns:
        MessageOut: Подтверждение "Content added". Идентификатор закладки не возвращается.
    """

    content = Content(
        link=content_in.link,
        type=content_in.type,
        title=content_in.title,
        tags=[],
        user_id=current_user.id,
    )

    db.add(content)
    db.commit()

    logger.debug("Пользователь %s добавил закладку %s", current_user.id, content.id)
    return {"message": "Content added"}


@router.get("", response_model=ContentList)
def list_content(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """
    Получает список всех закладок текущего пользователя.

    Returns:
        ContentList: Закладки в порядке создания, каждая с id и username владельца.
    """

    contents = (
        db.query(Content)
        .options(joinedload(Content.owner))
        .filter(Content.user_id == current_user.id)
        .order_by(Content.id)
        .all()
    )

    return {"content": contents}


@router.delete("", response_model=MessageOut)
def delete_content(content_in: ContentDelete | None = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """
    Удаляет закладку, принадлежащую текущему пользователю.

    Args:
        content_in (ContentDelete): contentId удаляемой закладки.
        db (Session): Сессия базы данных, предоставляемая через зависимость get_db().
        current_user (User): Текущий пользователь, полученный через get_current_user().

    Returns:
        MessageOut: "Content deleted", даже если подходящей закладки не нашлось.

    - Владелец проверяется в самом условии удаления: чужая закладка просто не совпадёт.
    - Без contentId возвращается 400 "Content ID is required".
    """

    if content_in is None or content_in.content_id is None:
        raise ValidationError(CONTENT_ID_REQUIRED)

    deleted = (
        db.query(Content)
        .filter(Content.id == content_in.content_id, Content.user_id == current_user.id)
        .delete(synchronize_session=False)
    )
    db.commit()

    logger.debug("Пользователь %s удалил закладку %s (строк: %s)", current_user.id, content_in.content_id, deleted)
    return {"message": "Content deleted"}
