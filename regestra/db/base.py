from regestra.models.artwork import Artwork, ArtworkLike
from regestra.models.base import Base
from regestra.models.collection import Collection, CollectionArtwork
from regestra.models.conversation import Conversation, ConversationMember
from regestra.models.message import Message
from regestra.models.notification import Notification
from regestra.models.social_post import PostComment, PostLike, SocialPost
from regestra.models.user import User
from regestra.models.user_follow import UserFollow
from regestra.models.user_preference import UserPreference

__all__ = [
    "Base",
    "User",
    "UserPreference",
    "UserFollow",
    "Artwork",
    "ArtworkLike",
    "SocialPost",
    "PostLike",
    "PostComment",
    "Collection",
    "CollectionArtwork",
    "Conversation",
    "ConversationMember",
    "Message",
    "Notification",
]
