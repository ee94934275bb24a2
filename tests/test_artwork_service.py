import base64
import uuid
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from regestra.core.config import settings
from regestra.infra.image_enhancer import EnhancedImage, ImageEnhancerClient, ImageEnhancerError
from regestra.infra.object_storage import ObjectStorageClient, ObjectStorageError
from regestra.repositories.preference_repo import PreferenceRepository
from regestra.schemas.artwork import CreateArtworkRequest, EnhanceImageRequest
from regestra.services.artwork_service import ArtworkService
from regestra.services.media_service import MediaService

PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake image bytes").decode("ascii")


def _service(db, *, storage=None, enhancer=None) -> ArtworkService:
    if storage is None:
        storage = MagicMock(spec=ObjectStorageClient)
        storage.upload.return_value = "https://cdn.example.com/artworks/a.png"
    return ArtworkService(db, media_service=MediaService(storage=storage), enhancer=enhancer)


def _payload(**values) -> CreateArtworkRequest:
    return CreateArtworkRequest(
        image=values.get("image", PNG_DATA_URL),
        title=values.get("title", "Harbor at Dusk"),
        tags=values.get("tags", ["#Oil", "landscape", "oil"]),
    )


def test_create_artwork_is_limited_to_artists(db, make_user) -> None:
    viewer = make_user("Viewer")

    with pytest.raises(HTTPException) as exc:
        _service(db).create_artwork(user=viewer, payload=_payload())

    assert exc.value.status_code == 403


def test_create_artwork_normalizes_tags_and_rejects_duplicate_image(db, make_user) -> None:
    artist = make_user("Artist", role="artist")
    service = _service(db)

    item = service.create_artwork(user=artist, payload=_payload())

    assert item.image_url == "https://cdn.example.com/artworks/a.png"
    assert item.tags == ["oil", "landscape"]
    assert item.artist_name == "Artist"
    assert item.like_count == 0

    with pytest.raises(HTTPException) as exc:
        service.create_artwork(user=artist, payload=_payload(title="Again"))
    assert exc.value.status_code == 409


def test_create_artwork_keeps_image_inline_when_storage_fails(db, make_user) -> None:
    artist = make_user("Artist", role="artist")
    storage = MagicMock(spec=ObjectStorageClient)
    storage.upload.side_effect = ObjectStorageError(code="storage_network_error", message="down")

    item = _service(db, storage=storage).create_artwork(user=artist, payload=_payload())

    assert item.image_url == PNG_DATA_URL


def test_create_artwork_rejects_invalid_image(db, make_user) -> None:
    artist = make_user("Artist", role="artist")

    with pytest.raises(HTTPException) as exc:
        _service(db).create_artwork(user=artist, payload=_payload(image="data:text/plain;base64,aGVsbG8gd29ybGQ="))

    assert exc.value.status_code == 400


def test_delete_artwork_is_owner_only_soft_delete(db, make_user) -> None:
    artist = make_user("Artist", role="artist")
    other = make_user("Other", role="artist")
    service = _service(db)
    item = service.create_artwork(user=artist, payload=_payload())

    with pytest.raises(HTTPException) as exc:
        service.delete_artwork(user=other, artwork_id=item.id)
    assert exc.value.status_code == 403

    service.delete_artwork(user=artist, artwork_id=item.id)

    assert service.list_artworks(viewer=artist, artist_id=artist.id, offset=0, limit=10).items == []
    with pytest.raises(HTTPException) as missing_exc:
        service.get_artwork(viewer=artist, artwork_id=item.id)
    assert missing_exc.value.status_code == 404


def test_record_interaction_accumulates_weights(db, make_user) -> None:
    artist = make_user("Artist", role="artist")
    viewer = make_user("Viewer")
    service = _service(db)
    item = service.create_artwork(user=artist, payload=_payload(tags=["ink"]))

    service.record_interaction(user=viewer, artwork_id=item.id, kind="view")
    service.record_interaction(user=viewer, artwork_id=item.id, kind="linger")
    service.record_interaction(user=viewer, artwork_id=item.id, kind="save")

    data = PreferenceRepository(db).get(viewer.id)
    assert data.tag_scores == {"ink": 9}
    assert data.artist_scores == {artist.id: 9}
    assert data.viewed_artwork_ids == {item.id}


def test_record_interaction_rejects_unknown_kind_and_artwork(db, make_user) -> None:
    artist = make_user("Artist", role="artist")
    viewer = make_user("Viewer")
    service = _service(db)
    item = service.create_artwork(user=artist, payload=_payload())

    with pytest.raises(HTTPException) as kind_exc:
        service.record_interaction(user=viewer, artwork_id=item.id, kind="stare")
    with pytest.raises(HTTPException) as missing_exc:
        service.record_interaction(user=viewer, artwork_id=uuid.uuid4(), kind="view")

    assert kind_exc.value.status_code == 400
    assert missing_exc.value.status_code == 404


def test_enhance_image_returns_original_when_not_configured(db, monkeypatch) -> None:
    monkeypatch.setattr(settings, "enhancer_api_key", None)

    response = _service(db).enhance_image(payload=EnhanceImageRequest(image=PNG_DATA_URL))

    assert response.enhanced is False
    assert response.image == PNG_DATA_URL


def test_enhance_image_returns_transformed_image(db) -> None:
    enhancer = MagicMock(spec=ImageEnhancerClient)
    enhancer.is_configured.return_value = True
    enhancer.enhance.return_value = EnhancedImage(mime_type="image/png", content=b"sharper")

    response = _service(db, enhancer=enhancer).enhance_image(
        payload=EnhanceImageRequest(image=PNG_DATA_URL, instruction="  "),
    )

    assert response.enhanced is True
    assert response.image == "data:image/png;base64," + base64.b64encode(b"sharper").decode("ascii")
    assert enhancer.enhance.call_args.kwargs["instruction"] == settings.enhancer_default_instruction


def test_enhance_image_surfaces_remote_failure_as_bad_gateway(db) -> None:
    enhancer = MagicMock(spec=ImageEnhancerClient)
    enhancer.is_configured.return_value = True
    enhancer.enhance.side_effect = ImageEnhancerError(code="enhancer_http_error", message="boom")

    with pytest.raises(HTTPException) as exc:
        _service(db, enhancer=enhancer).enhance_image(payload=EnhanceImageRequest(image=PNG_DATA_URL))

    assert exc.value.status_code == 502
    assert enhancer.enhance.call_count == 1
