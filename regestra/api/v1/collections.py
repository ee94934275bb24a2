from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.collection import AddToCollectionRequest, CollectionItem, CollectionListResponse
from regestra.schemas.common import GenericMessageResponse
from regestra.services.collection_service import CollectionService

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("/users/{user_id}", response_model=CollectionListResponse)
def list_collections(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CollectionService(db).list_collections(user_id=user_id)


@router.post("/items", response_model=CollectionItem)
def add_to_collection(
    payload: AddToCollectionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CollectionService(db).add_to_collection(user=current_user, payload=payload)


@router.delete("/items/{item_id}", response_model=GenericMessageResponse)
def remove_from_collection(
    item_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CollectionService(db).remove_from_collection(user=current_user, item_id=item_id)
