import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from regestra.core.config import settings
from regestra.core.image_data import build_image_data_url, image_digest, parse_image_data_url
from regestra.infra.image_enhancer import ImageEnhancerClient, ImageEnhancerError
from regestra.models.artwork import Artwork
from regestra.models.user import User
from regestra.repositories.artwork_repo import ArtworkRepository
from regestra.repositories.preference_repo import PreferenceRepository
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.artwork import (
    ArtworkItem,
    ArtworkListResponse,
    CreateArtworkRequest,
    EnhanceImageRequest,
    EnhanceImageResponse,
)
from regestra.schemas.common import GenericMessageResponse
from regestra.services.media_service import MediaService

logger = logging.getLogger(__name__)

INTERACTION_WEIGHTS = {"view": 1, "linger": 3, "save": 5, "like": 5}
MAX_TAG_LENGTH = 32


class ArtworkService:
    def __init__(
        self,
        db: Session,
        *,
        media_service: MediaService | None = None,
        enhancer: ImageEnhancerClient | None = None,
    ) -> None:
        self.db = db
        self.artwork_repo = ArtworkRepository(db)
        self.preference_repo = PreferenceRepository(db)
        self.user_repo = UserRepository(db)
        self.media_service = media_service or MediaService()
        self.enhancer = enhancer or ImageEnhancerClient()

    def create_artwork(self, *, user: User, payload: CreateArtworkRequest) -> ArtworkItem:
        if user.role != "artist":
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="only artists can publish artworks")
        title = payload.title.strip()
        if not title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title is required")

        try:
            _, content = parse_image_data_url(payload.image)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid image: {exc}") from exc
        if self.artwork_repo.get_by_artist_and_digest(artist_user_id=user.id, image_digest=image_digest(content)):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="you have already published this artwork",
            )

        stored = self.media_service.store_image(owner_id=user.id, data_url=payload.image, folder="artworks")

        artwork = self.artwork_repo.create(
            artist_user_id=user.id,
            image_url=stored.url,
            image_digest=stored.digest,
            title=title,
            description=payload.description.strip(),
            size=payload.size.strip() or "Digital",
            tags=self._normalize_tags(payload.tags),
        )
        self.db.commit()
        self.db.refresh(artwork)
        return self.build_items([artwork], viewer=user)[0]

    def list_artworks(
        self,
        *,
        viewer: User,
        artist_id: uuid.UUID | None,
        offset: int,
        limit: int,
    ) -> ArtworkListResponse:
        artworks = self.artwork_repo.list_artworks(artist_user_id=artist_id, offset=offset, limit=limit)
        return ArtworkListResponse(items=self.build_items(artworks, viewer=viewer))

    def get_artwork(self, *, viewer: User, artwork_id: uuid.UUID) -> ArtworkItem:
        artwork = self.artwork_repo.get_by_id(artwork_id)
        if not artwork:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artwork not found")
        return self.build_items([artwork], viewer=viewer)[0]

    def delete_artwork(self, *, user: User, artwork_id: uuid.UUID) -> GenericMessageResponse:
        artwork = self.artwork_repo.get_by_id(artwork_id)
        if not artwork:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artwork not found")
        if artwork.artist_user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="you can only delete your own artworks")

        self.artwork_repo.soft_delete(artwork)
        self.db.commit()
        return GenericMessageResponse(message="artwork deleted")

    def record_interaction(self, *, user: User, artwork_id: uuid.UUID, kind: str) -> GenericMessageResponse:
        artwork = self.artwork_repo.get_by_id(artwork_id)
        if not artwork:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artwork not found")
        self.apply_interaction(user=user, artwork=artwork, kind=kind)
        self.db.commit()
        return GenericMessageResponse(message="interaction recorded")

    def apply_interaction(self, *, user: User, artwork: Artwork, kind: str) -> None:
        """Add affinity weight for the artwork's tags and artist; the caller commits."""
        weight = INTERACTION_WEIGHTS.get(kind)
        if weight is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unsupported interaction kind")

        data = self.preference_repo.get(user.id)
        for tag in artwork.tags_json or []:
            data.tag_scores[tag] = data.tag_scores.get(tag, 0) + weight
        data.artist_scores[artwork.artist_user_id] = data.artist_scores.get(artwork.artist_user_id, 0) + weight
        if kind == "view":
            data.viewed_artwork_ids.add(artwork.id)
        self.preference_repo.set(user.id, data)

    def enhance_image(self, *, payload: EnhanceImageRequest) -> EnhanceImageResponse:
        try:
            mime_type, content = parse_image_data_url(payload.image)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid image: {exc}") from exc

        if not self.enhancer.is_configured():
            logger.warning("image enhancer not configured, returning original image")
            return EnhanceImageResponse(image=payload.image, enhanced=False)

        instruction = (payload.instruction or "").strip() or settings.enhancer_default_instruction
        try:
            result = self.enhancer.enhance(content=content, mime_type=mime_type, instruction=instruction)
        except ImageEnhancerError as exc:
            logger.warning("image enhancement failed", extra={"code": exc.code})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc

        if result is None:
            return EnhanceImageResponse(image=payload.image, enhanced=False)
        return EnhanceImageResponse(image=build_image_data_url(result.mime_type, result.content), enhanced=True)

    def build_items(self, artworks: list[Artwork], *, viewer: User) -> list[ArtworkItem]:
        if not artworks:
            return []
        artists = self.user_repo.get_active_map({artwork.artist_user_id for artwork in artworks})
        liked_ids = self.artwork_repo.liked_artwork_ids(viewer.id)

        items: list[ArtworkItem] = []
        for artwork in artworks:
            artist = artists.get(artwork.artist_user_id)
            items.append(
                ArtworkItem(
                    id=artwork.id,
                    artist_id=artwork.artist_user_id,
                    artist_name=artist.name if artist else settings.deleted_user_name,
                    image_url=artwork.image_url,
                    title=artwork.title,
                    description=artwork.description,
                    size=artwork.size,
                    tags=list(artwork.tags_json or []),
                    like_count=artwork.like_count,
                    comment_count=artwork.comment_count,
                    liked=artwork.id in liked_ids,
                    created_at=artwork.created_at,
                )
            )
        return items

    def _normalize_tags(self, tags: list[str]) -> list[str]:
        normalized: list[str] = []
        for tag in tags:
            value = tag.strip().lstrip("#").lower()[:MAX_TAG_LENGTH]
            if value and value not in normalized:
                normalized.append(value)
        return normalized
