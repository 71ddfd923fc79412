"""User model."""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from src.database import Base


class User(Base):
    """A directory entry. Name and email are each unique across all users."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("name", name="uq_users_name"),
        UniqueConstraint("email", name="uq_users_email"),
        # Keep SQLite from handing out the id of a deleted row again
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"
