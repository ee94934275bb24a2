from __future__ import annotations

import httpx

from regestra.core.config import settings


class ObjectStorageError(Exception):
    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ObjectStorageClient:
    """Uploads raw image bytes to the object store and returns their public URL."""

    def upload(self, *, path: str, content: bytes, content_type: str) -> str:
        base_url = (settings.storage_base_url or "").strip().rstrip("/")
        api_key = (settings.storage_api_key or "").strip()
        if not base_url or not api_key:
            raise ObjectStorageError(code="storage_not_configured", message="object storage is not configured")

        bucket = settings.storage_bucket
        endpoint = f"{base_url}/storage/v1/object/{bucket}/{path}"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "apikey": api_key,
            "Content-Type": content_type,
            "x-upsert": "false",
        }

        try:
            with httpx.Client(timeout=settings.storage_timeout_seconds) as client:
                response = client.post(endpoint, content=content, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ObjectStorageError(
                code="storage_http_error",
                message=f"object storage upload failed (HTTP {exc.response.status_code})",
            ) from exc
        except httpx.HTTPError as exc:
            raise ObjectStorageError(code="storage_network_error", message="object storage is unreachable") from exc

        return self.public_url(path)

    def public_url(self, path: str) -> str:
        public_base = (settings.storage_public_base_url or settings.storage_base_url or "").strip().rstrip("/")
        return f"{public_base}/storage/v1/object/public/{settings.storage_bucket}/{path}"
