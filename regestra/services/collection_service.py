import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from regestra.core.config import settings
from regestra.models.collection import Collection, CollectionArtwork
from regestra.models.user import User
from regestra.repositories.artwork_repo import ArtworkRepository
from regestra.repositories.collection_repo import CollectionRepository
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.collection import (
    AddToCollectionRequest,
    CollectionArtworkItem,
    CollectionItem,
    CollectionListResponse,
    PlatformArtworkRef,
)
from regestra.schemas.common import GenericMessageResponse


class CollectionService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.collection_repo = CollectionRepository(db)
        self.artwork_repo = ArtworkRepository(db)
        self.user_repo = UserRepository(db)

    def add_to_collection(self, *, user: User, payload: AddToCollectionRequest) -> CollectionItem:
        ref = payload.artwork
        if isinstance(ref, PlatformArtworkRef):
            artwork = self.artwork_repo.get_by_id(ref.artwork_id)
            if not artwork:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artwork not found")
            artist = self.user_repo.get_by_id(artwork.artist_user_id)
            values = {
                "kind": "platform",
                "artwork_id": artwork.id,
                "image_url": artwork.image_url,
                "title": artwork.title,
                "artist_name": artist.name if artist else settings.deleted_user_name,
                "description": artwork.description,
                "size": artwork.size,
                "tags": list(artwork.tags_json or []),
            }
        else:
            values = {
                "kind": "external",
                "artwork_id": None,
                "image_url": ref.image_url.strip(),
                "title": ref.title.strip(),
                "artist_name": ref.artist_name.strip() or "Unknown Artist",
                "description": ref.description,
                "size": ref.size,
                "tags": list(ref.tags),
            }

        if self.collection_repo.image_exists_for_owner(owner_user_id=user.id, image_url=values["image_url"]):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="this artwork is already in your collections",
            )

        name = (payload.collection_name or "").strip() or settings.default_collection_name
        collection = self.collection_repo.get_by_name(owner_user_id=user.id, name=name)
        if not collection:
            collection = self.collection_repo.create(owner_user_id=user.id, name=name)

        self.collection_repo.add_item(collection=collection, **values)
        self.db.commit()
        self.db.refresh(collection)
        return self._build_collection(collection)

    def list_collections(self, *, user_id: uuid.UUID) -> CollectionListResponse:
        collections = self.collection_repo.list_for_owner(user_id)
        return CollectionListResponse(collections=[self._build_collection(item) for item in collections])

    def remove_from_collection(self, *, user: User, item_id: uuid.UUID) -> GenericMessageResponse:
        item = self.collection_repo.get_item_for_owner(owner_user_id=user.id, item_id=item_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="collection item not found")
        self.collection_repo.delete_item(item)
        self.db.commit()
        return GenericMessageResponse(message="removed from collection")

    def _build_collection(self, collection: Collection) -> CollectionItem:
        return CollectionItem(
            id=collection.id,
            name=collection.name,
            artworks=[self._build_item(item) for item in collection.items],
        )

    def _build_item(self, item: CollectionArtwork) -> CollectionArtworkItem:
        return CollectionArtworkItem(
            id=item.id,
            kind=item.kind,
            artwork_id=item.artwork_id,
            image_url=item.image_url,
            title=item.title,
            artist_name=item.artist_name,
            description=item.description,
            size=item.size,
            tags=list(item.tags_json or []),
            created_at=item.created_at,
        )
