from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from brainly.core.database import Base


class Content(Base):
    """
    Класс закладки.

    Атрибуты:
        id (int): Уникальный идентификатор закладки.
        link (str): Сохранённая ссылка.
        type (str): Тип материала (article, video, tweet и т.п.).
        title (str): Заголовок закладки.
        tags (list[int]): Упорядоченный список id тегов. При создании всегда пустой.
        created_at (datetime): Дата и время создания закладки.
        user_id (int): Идентификатор владельца.
        owner (User): Объект пользователя, владеющего закладкой.
    """

    __tablename__ = "contents"
    id = Column(Integer, primary_key=True, index=True)
    link = Column(String, nullable=False)
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    owner = relationship("User", back_populates="contents")
