import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from regestra.models.user import User


class UserRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _with_active_filter(self, stmt, *, include_deleted: bool):
        if include_deleted:
            return stmt
        return stmt.where(User.is_deleted.is_(False))

    def get_by_id(self, user_pk: uuid.UUID, *, include_deleted: bool = False) -> User | None:
        stmt = select(User).where(User.id == user_pk)
        stmt = self._with_active_filter(stmt, include_deleted=include_deleted)
        return self.db.scalar(stmt)

    def get_by_username(self, username: str, *, include_deleted: bool = False) -> User | None:
        stmt = select(User).where(func.lower(User.username) == username.lower())
        stmt = self._with_active_filter(stmt, include_deleted=include_deleted)
        return self.db.scalar(stmt)

    def get_by_email(self, email: str, *, include_deleted: bool = False) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        stmt = self._with_active_filter(stmt, include_deleted=include_deleted)
        return self.db.scalar(stmt)

    def get_active_map(self, user_ids: set[uuid.UUID]) -> dict[uuid.UUID, User]:
        if not user_ids:
            return {}
        stmt = select(User).where(User.id.in_(user_ids), User.is_deleted.is_(False))
        return {user.id: user for user in self.db.scalars(stmt)}

    def list_users(
        self,
        *,
        keyword: str | None = None,
        exclude_user_id: uuid.UUID | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> list[User]:
        stmt = select(User).where(User.is_deleted.is_(False))
        if keyword:
            like = f"%{keyword}%"
            stmt = stmt.where(or_(User.username.ilike(like), User.name.ilike(like)))
        if exclude_user_id:
            stmt = stmt.where(User.id != exclude_user_id)
        stmt = stmt.order_by(User.name.asc()).offset(offset).limit(limit)
        return list(self.db.scalars(stmt))

    def create(
        self,
        *,
        user_pk: uuid.UUID,
        email: str,
        role: str,
        name: str,
        username: str,
        avatar_url: str,
        bio: str,
    ) -> User:
        user = User(
            id=user_pk,
            email=email,
            role=role,
            name=name,
            username=username,
            avatar_url=avatar_url,
            bio=bio,
            socials_json={},
        )
        self.db.add(user)
        self.db.flush()
        return user
