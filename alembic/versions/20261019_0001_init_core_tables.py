"""init core tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="artLover"),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("username", sa.String(length=32), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("cover_image_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        sa.Column("location", sa.String(length=128), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("commission_status", sa.String(length=16), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("socials_json", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("role IN ('artist', 'artLover')", name="ck_users_role"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_users_username",
        "users",
        ["username"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )
    op.create_index(
        "ix_users_email",
        "users",
        ["email"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )
    op.create_index("ix_users_is_deleted", "users", ["is_deleted"], unique=False)

    op.create_table(
        "user_preferences",
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("hidden_post_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("hidden_artwork_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("dismissed_recommendation_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("hidden_conversation_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("deleted_conversation_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("hidden_message_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("tag_scores_json", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("artist_scores_json", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("viewed_artwork_ids_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "user_follows",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("follower_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("target_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        _created_at(),
        sa.CheckConstraint("follower_user_id <> target_user_id", name="ck_user_follows_not_self"),
        sa.ForeignKeyConstraint(["follower_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["target_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_user_follows_user_target",
        "user_follows",
        ["follower_user_id", "target_user_id"],
        unique=True,
    )
    op.create_index("ix_user_follows_target_user_id", "user_follows", ["target_user_id"], unique=False)

    op.create_table(
        "artworks",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("artist_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("image_digest", sa.String(length=64), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("size", sa.String(length=64), nullable=False, server_default="Digital"),
        sa.Column("tags_json", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["artist_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_artworks_artist_user_id", "artworks", ["artist_user_id"], unique=False)
    op.create_index("ix_artworks_created_at", "artworks", ["created_at"], unique=False)
    op.create_index("ix_artworks_image_digest", "artworks", ["artist_user_id", "image_digest"], unique=False)

    op.create_table(
        "artwork_likes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("artwork_id", postgresql.UUID(as_uuid=True), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["artwork_id"], ["artworks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_artwork_likes_user_artwork", "artwork_likes", ["user_id", "artwork_id"], unique=True)
    op.create_index("ix_artwork_likes_artwork_id", "artwork_likes", ["artwork_id"], unique=False)

    op.create_table(
        "social_posts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("image_url", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["author_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_social_posts_author_user_id", "social_posts", ["author_user_id"], unique=False)
    op.create_index("ix_social_posts_created_at", "social_posts", ["created_at"], unique=False)

    op.create_table(
        "post_likes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["social_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_post_likes_post_user", "post_likes", ["post_id", "user_id"], unique=True)

    op.create_table(
        "post_comments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["social_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_comments_post_id", "post_comments", ["post_id"], unique=False)

    op.create_table(
        "collections",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["owner_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_collections_owner_name", "collections", ["owner_user_id", "name"], unique=True)

    op.create_table(
        "collection_artworks",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("collection_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("artwork_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("artist_name", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("size", sa.String(length=64), nullable=True),
        sa.Column("tags_json", sa.JSON(), nullable=False, server_default="[]"),
        _created_at(),
        sa.CheckConstraint(
            "(kind = 'platform' AND artwork_id IS NOT NULL) OR (kind = 'external' AND artwork_id IS NULL)",
            name="ck_collection_artworks_kind_oneof",
        ),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["artwork_id"], ["artworks.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_collection_artworks_collection_id", "collection_artworks", ["collection_id"], unique=False)

    op.create_table(
        "conversations",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("last_message", sa.Text(), nullable=False, server_default=""),
        sa.Column("last_message_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_conversations_last_message_at", "conversations", ["last_message_at"], unique=False)

    op.create_table(
        "conversation_members",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("unread_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("unread_count >= 0", name="ck_conversation_members_unread_non_negative"),
        sa.ForeignKeyConstraint(["conversation_id"], ["conversations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_conversation_members_conversation_user",
        "conversation_members",
        ["conversation_id", "user_id"],
        unique=True,
    )
    op.create_index("ix_conversation_members_user_id", "conversation_members", ["user_id"], unique=False)

    op.create_table(
        "messages",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["conversation_id"], ["conversations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_messages_conversation_created_at",
        "messages",
        ["conversation_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "notifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("recipient_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("actor_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("content_preview", sa.Text(), nullable=True),
        sa.Column("unread", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        sa.CheckConstraint("type IN ('like', 'comment', 'follow')", name="ck_notifications_type"),
        sa.CheckConstraint("recipient_user_id <> actor_user_id", name="ck_notifications_not_self"),
        sa.ForeignKeyConstraint(["recipient_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notifications_recipient_created_at",
        "notifications",
        ["recipient_user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_recipient_created_at", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("ix_messages_conversation_created_at", table_name="messages")
    op.drop_table("messages")

    op.drop_index("ix_conversation_members_user_id", table_name="conversation_members")
    op.drop_index("uq_conversation_members_conversation_user", table_name="conversation_members")
    op.drop_table("conversation_members")

    op.drop_index("ix_conversations_last_message_at", table_name="conversations")
    op.drop_table("conversations")

    op.drop_index("ix_collection_artworks_collection_id", table_name="collection_artworks")
    op.drop_table("collection_artworks")
    op.drop_index("uq_collections_owner_name", table_name="collections")
    op.drop_table("collections")

    op.drop_index("ix_post_comments_post_id", table_name="post_comments")
    op.drop_table("post_comments")
    op.drop_index("uq_post_likes_post_user", table_name="post_likes")
    op.drop_table("post_likes")
    op.drop_index("ix_social_posts_created_at", table_name="social_posts")
    op.drop_index("ix_social_posts_author_user_id", table_name="social_posts")
    op.drop_table("social_posts")

    op.drop_index("ix_artwork_likes_artwork_id", table_name="artwork_likes")
    op.drop_index("uq_artwork_likes_user_artwork", table_name="artwork_likes")
    op.drop_table("artwork_likes")
    op.drop_index("ix_artworks_image_digest", table_name="artworks")
    op.drop_index("ix_artworks_created_at", table_name="artworks")
    op.drop_index("ix_artworks_artist_user_id", table_name="artworks")
    op.drop_table("artworks")

    op.drop_index("ix_user_follows_target_user_id", table_name="user_follows")
    op.drop_index("uq_user_follows_user_target", table_name="user_follows")
    op.drop_table("user_follows")

    op.drop_table("user_preferences")

    op.drop_index("ix_users_is_deleted", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
