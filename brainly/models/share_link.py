from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from brainly.core.database import Base


class ShareLink(Base):
    """
    Публичная ссылка на коллекцию пользователя. У пользователя не больше одной ссылки.

    Атрибуты:
        id (int): Уникальный идентификатор записи.
        hash (str): Случайный токен из URL публичной страницы.
        created_at (datetime): Дата и время включения публичного доступа.
        user_id (int): Идентификатор владельца (уникален).
        owner (User): Владелец коллекции.
    """

    __tablename__ = "share_links"
    id = Column(Integer, primary_key=True, index=True)
    hash = Column(String(32), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    owner = relationship("User", back_populates="share_link")
