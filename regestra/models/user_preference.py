import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from regestra.models.base import Base


class UserPreference(Base):
    __tablename__ = "user_preferences"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    hidden_post_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    hidden_artwork_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    dismissed_recommendation_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    hidden_conversation_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    deleted_conversation_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    hidden_message_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    tag_scores_json: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)
    artist_scores_json: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)
    viewed_artwork_ids_json: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    conversation_cleared_at_json: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
