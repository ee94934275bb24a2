import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from regestra.models.collection import Collection, CollectionArtwork


class CollectionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_for_owner(self, owner_user_id: uuid.UUID) -> list[Collection]:
        stmt = select(Collection).where(Collection.owner_user_id == owner_user_id).order_by(Collection.created_at.asc())
        return list(self.db.scalars(stmt))

    def count_for_owner(self, owner_user_id: uuid.UUID) -> int:
        stmt = select(func.count(Collection.id)).where(Collection.owner_user_id == owner_user_id)
        return int(self.db.scalar(stmt) or 0)

    def get_by_name(self, *, owner_user_id: uuid.UUID, name: str) -> Collection | None:
        stmt = select(Collection).where(Collection.owner_user_id == owner_user_id, Collection.name == name)
        return self.db.scalar(stmt)

    def create(self, *, owner_user_id: uuid.UUID, name: str) -> Collection:
        collection = Collection(owner_user_id=owner_user_id, name=name)
        self.db.add(collection)
        self.db.flush()
        return collection

    def image_exists_for_owner(self, *, owner_user_id: uuid.UUID, image_url: str) -> bool:
        stmt = (
            select(CollectionArtwork.id)
            .join(Collection, Collection.id == CollectionArtwork.collection_id)
            .where(Collection.owner_user_id == owner_user_id, CollectionArtwork.image_url == image_url)
        )
        return self.db.scalar(stmt) is not None

    def add_item(
        self,
        *,
        collection: Collection,
        kind: str,
        artwork_id: uuid.UUID | None,
        image_url: str,
        title: str,
        artist_name: str,
        description: str | None,
        size: str | None,
        tags: list[str],
    ) -> CollectionArtwork:
        item = CollectionArtwork(
            collection_id=collection.id,
            kind=kind,
            artwork_id=artwork_id,
            image_url=image_url,
            title=title,
            artist_name=artist_name,
            description=description,
            size=size,
            tags_json=tags,
        )
        self.db.add(item)
        self.db.flush()
        return item

    def get_item_for_owner(self, *, owner_user_id: uuid.UUID, item_id: uuid.UUID) -> CollectionArtwork | None:
        stmt = (
            select(CollectionArtwork)
            .join(Collection, Collection.id == CollectionArtwork.collection_id)
            .where(CollectionArtwork.id == item_id, Collection.owner_user_id == owner_user_id)
        )
        return self.db.scalar(stmt)

    def delete_item(self, item: CollectionArtwork) -> None:
        self.db.delete(item)
