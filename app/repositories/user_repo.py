from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_password(self, session: Session, user_name: str) -> str | None:
        """Return the stored password for user_name, or None if no such user."""
        stmt = select(User.user_password).where(User.user_name == user_name)
        return session.exec(stmt).first()
