import logging
import uuid
from dataclasses import dataclass

from fastapi import HTTPException, status

from regestra.core.image_data import build_image_data_url, extension_for, image_digest, parse_image_data_url
from regestra.infra.object_storage import ObjectStorageClient, ObjectStorageError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StoredImage:
    url: str
    digest: str
    inline: bool


class MediaService:
    def __init__(self, storage: ObjectStorageClient | None = None) -> None:
        self.storage = storage or ObjectStorageClient()

    def store_image(self, *, owner_id: uuid.UUID, data_url: str, folder: str) -> StoredImage:
        """Upload an image; fall back to keeping it inline when the object store fails."""
        try:
            mime_type, content = parse_image_data_url(data_url)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid image: {exc}") from exc

        digest = image_digest(content)
        path = f"{folder}/{owner_id}/{digest[:16]}-{uuid.uuid4().hex[:8]}.{extension_for(mime_type)}"
        try:
            url = self.storage.upload(path=path, content=content, content_type=mime_type)
        except ObjectStorageError as exc:
            logger.warning(
                "object storage upload failed, keeping image inline",
                extra={"owner_id": str(owner_id), "code": exc.code},
            )
            return StoredImage(url=build_image_data_url(mime_type, content), digest=digest, inline=True)
        return StoredImage(url=url, digest=digest, inline=False)
