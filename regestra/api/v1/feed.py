from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.feed import FeedResponse
from regestra.services.feed_service import FeedService

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
def assemble_feed(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return FeedService(db).assemble(user=current_user)
