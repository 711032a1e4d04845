from sqlalchemy import Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, validates
from pix_api.db.base_class import Base
from datetime import datetime


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    # Toujours un hash bcrypt, jamais le mot de passe en clair
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    cgu: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    @validates("email")
    def _lower_email(self, key, value):
        return value.lower() if value else value

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
