from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

import httpx

from regestra.core.config import settings


class ImageEnhancerError(Exception):
    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(slots=True)
class EnhancedImage:
    mime_type: str
    content: bytes


class ImageEnhancerClient:
    def is_configured(self) -> bool:
        return bool((settings.enhancer_api_key or "").strip())

    def enhance(self, *, content: bytes, mime_type: str, instruction: str) -> EnhancedImage | None:
        """Return the transformed image, or None when the model answered without image data."""
        api_key = (settings.enhancer_api_key or "").strip()
        if not api_key:
            raise ImageEnhancerError(code="enhancer_not_configured", message="image enhancer is not configured")

        payload = {
            "contents": [
                {
                    "parts": [
                        {"inline_data": {"mime_type": mime_type, "data": base64.b64encode(content).decode("ascii")}},
                        {"text": instruction},
                    ]
                }
            ],
            "generationConfig": {"responseModalities": ["IMAGE"]},
        }

        try:
            with httpx.Client(timeout=settings.enhancer_timeout_seconds) as client:
                response = client.post(
                    self._endpoint(),
                    json=payload,
                    headers={"x-goog-api-key": api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ImageEnhancerError(
                code="enhancer_http_error",
                message=f"image enhancement failed (HTTP {exc.response.status_code})",
            ) from exc
        except httpx.HTTPError as exc:
            raise ImageEnhancerError(code="enhancer_network_error", message="image enhancer is unreachable") from exc
        except ValueError as exc:
            raise ImageEnhancerError(code="enhancer_invalid_response", message="image enhancer returned invalid json") from exc

        return self._parse_result(data)

    def _endpoint(self) -> str:
        base_url = settings.enhancer_base_url.rstrip("/")
        return f"{base_url}/models/{settings.enhancer_model_name}:generateContent"

    def _parse_result(self, data: dict[str, Any]) -> EnhancedImage | None:
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not isinstance(candidates, list) or not candidates:
            return None
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return None

        for part in parts:
            if not isinstance(part, dict):
                continue
            inline = part.get("inlineData") or part.get("inline_data")
            if not isinstance(inline, dict) or not inline.get("data"):
                continue
            try:
                image_bytes = base64.b64decode(inline["data"], validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ImageEnhancerError(
                    code="enhancer_invalid_response",
                    message="image enhancer returned undecodable image data",
                ) from exc
            mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
            return EnhancedImage(mime_type=mime_type, content=image_bytes)
        return None
