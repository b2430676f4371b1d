from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from brainly.core.database import Base


class User(Base):
    """
    Класс пользователя.

    Атрибуты:
        id (int): Уникальный идентификатор пользователя.
        username (str): Уникальное имя пользователя.
        name (str): Отображаемое имя.
        email (str): Адрес электронной почты пользователя.
        password_hash (str): Хэш пароля пользователя (bcrypt).
        created_at (datetime): Дата и время создания записи пользователя.
        contents (List[Content]): Закладки пользователя.
        share_link (ShareLink | None): Публичная ссылка на коллекцию, если она включена.
    """

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    contents = relationship("Content", back_populates="owner")
    share_link = relationship("ShareLink", back_populates="owner", uselist=False)
