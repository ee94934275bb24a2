import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from regestra.models.artwork import Artwork, ArtworkLike


class ArtworkRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(
        self,
        *,
        artist_user_id: uuid.UUID,
        image_url: str,
        image_digest: str | None,
        title: str,
        description: str,
        size: str,
        tags: list[str],
    ) -> Artwork:
        artwork = Artwork(
            artist_user_id=artist_user_id,
            image_url=image_url,
            image_digest=image_digest,
            title=title,
            description=description,
            size=size,
            tags_json=tags,
            like_count=0,
            comment_count=0,
        )
        self.db.add(artwork)
        self.db.flush()
        return artwork

    def get_by_id(self, artwork_id: uuid.UUID) -> Artwork | None:
        stmt = select(Artwork).where(Artwork.id == artwork_id, Artwork.is_deleted.is_(False))
        return self.db.scalar(stmt)

    def get_by_artist_and_digest(self, *, artist_user_id: uuid.UUID, image_digest: str) -> Artwork | None:
        stmt = select(Artwork).where(
            Artwork.artist_user_id == artist_user_id,
            Artwork.image_digest == image_digest,
            Artwork.is_deleted.is_(False),
        )
        return self.db.scalar(stmt)

    def list_artworks(
        self,
        *,
        artist_user_id: uuid.UUID | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Artwork]:
        stmt = select(Artwork).where(Artwork.is_deleted.is_(False))
        if artist_user_id:
            stmt = stmt.where(Artwork.artist_user_id == artist_user_id)
        stmt = stmt.order_by(Artwork.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt))

    def count_for_artist(self, artist_user_id: uuid.UUID) -> int:
        stmt = select(func.count(Artwork.id)).where(
            Artwork.artist_user_id == artist_user_id,
            Artwork.is_deleted.is_(False),
        )
        return int(self.db.scalar(stmt) or 0)

    def soft_delete(self, artwork: Artwork) -> None:
        artwork.is_deleted = True
        artwork.deleted_at = datetime.now(timezone.utc)
        self.db.add(artwork)

    def has_like(self, *, user_id: uuid.UUID, artwork_id: uuid.UUID) -> bool:
        stmt = select(ArtworkLike.id).where(ArtworkLike.user_id == user_id, ArtworkLike.artwork_id == artwork_id)
        return self.db.scalar(stmt) is not None

    def add_like(self, *, user_id: uuid.UUID, artwork_id: uuid.UUID) -> None:
        self.db.add(ArtworkLike(user_id=user_id, artwork_id=artwork_id))
        self.db.execute(
            update(Artwork)
            .where(Artwork.id == artwork_id)
            .values(like_count=Artwork.like_count + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.flush()

    def remove_like(self, *, user_id: uuid.UUID, artwork_id: uuid.UUID) -> None:
        self.db.execute(
            delete(ArtworkLike).where(ArtworkLike.user_id == user_id, ArtworkLike.artwork_id == artwork_id)
        )
        self.db.execute(
            update(Artwork)
            .where(Artwork.id == artwork_id, Artwork.like_count > 0)
            .values(like_count=Artwork.like_count - 1)
            .execution_options(synchronize_session=False)
        )

    def liked_artwork_ids(self, user_id: uuid.UUID) -> set[uuid.UUID]:
        stmt = select(ArtworkLike.artwork_id).where(ArtworkLike.user_id == user_id)
        return set(self.db.scalars(stmt))

    def count_likes_by_user(self, user_id: uuid.UUID) -> int:
        stmt = select(func.count(ArtworkLike.id)).where(ArtworkLike.user_id == user_id)
        return int(self.db.scalar(stmt) or 0)
