import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from regestra.models.user_follow import UserFollow


class FollowRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def exists(self, *, follower_id: uuid.UUID, target_id: uuid.UUID) -> bool:
        stmt = select(UserFollow.id).where(
            UserFollow.follower_user_id == follower_id,
            UserFollow.target_user_id == target_id,
        )
        return self.db.scalar(stmt) is not None

    def add(self, *, follower_id: uuid.UUID, target_id: uuid.UUID) -> UserFollow:
        follow = UserFollow(follower_user_id=follower_id, target_user_id=target_id)
        self.db.add(follow)
        self.db.flush()
        return follow

    def remove(self, *, follower_id: uuid.UUID, target_id: uuid.UUID) -> None:
        stmt = delete(UserFollow).where(
            UserFollow.follower_user_id == follower_id,
            UserFollow.target_user_id == target_id,
        )
        self.db.execute(stmt)

    def following_ids(self, follower_id: uuid.UUID) -> set[uuid.UUID]:
        stmt = select(UserFollow.target_user_id).where(UserFollow.follower_user_id == follower_id)
        return set(self.db.scalars(stmt))

    def count_followers(self, target_id: uuid.UUID) -> int:
        stmt = select(func.count(UserFollow.id)).where(UserFollow.target_user_id == target_id)
        return int(self.db.scalar(stmt) or 0)

    def count_following(self, follower_id: uuid.UUID) -> int:
        stmt = select(func.count(UserFollow.id)).where(UserFollow.follower_user_id == follower_id)
        return int(self.db.scalar(stmt) or 0)
