"""User store: CRUD over the users table."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authapi.errors import EmailAlreadyRegisteredError, UserNotFoundError
from authapi.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Service for reading and writing user records."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get a user by primary key."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def list_users(self) -> list[User]:
        """Get all users ordered by id."""
        return self.db.query(User).order_by(User.id).all()

    def create(self, name: str, email: str, password_hash: str | None = None) -> User:
        """Create a new user.

        Raises:
            EmailAlreadyRegisteredError: the email is already taken.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def update(self, user_id: int, name: str | None = None, email: str | None = None) -> User:
        """Update name and/or email. Fields left as None are unchanged."""
        user = self._get_or_404(user_id)
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Delete a user by id."""
        user = self._get_or_404(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user_id}")

    def get_or_create_by_email(self, email: str, name: str) -> User:
        """Find a user by email, creating one without a password if absent."""
        user = self.get_by_email(email)
        if user:
            return user
        try:
            return self.create(name=name, email=email)
        except EmailAlreadyRegisteredError:
            # Lost a race with a concurrent create for the same email
            user = self.get_by_email(email)
            if user is None:
                raise
            return user

    def _get_or_404(self, user_id: int) -> User:
        user = self.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Unique constraint violated: {e.orig}")
            raise EmailAlreadyRegisteredError() from e
