"""User model."""

from sqlalchemy import Column, Integer, String

from authapi.database import Base
from authapi.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication.

    ``password_hash`` stays NULL for accounts created through Google login.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
