from fastapi import APIRouter

from regestra.api.v1.artworks import router as artworks_router
from regestra.api.v1.collections import router as collections_router
from regestra.api.v1.conversations import router as conversations_router
from regestra.api.v1.feed import router as feed_router
from regestra.api.v1.notifications import router as notifications_router
from regestra.api.v1.posts import router as posts_router
from regestra.api.v1.preferences import router as preferences_router
from regestra.api.v1.profile import router as profile_router
from regestra.api.v1.social import router as social_router

api_router = APIRouter()
api_router.include_router(profile_router)
api_router.include_router(social_router)
api_router.include_router(artworks_router)
api_router.include_router(posts_router)
api_router.include_router(collections_router)
api_router.include_router(feed_router)
api_router.include_router(preferences_router)
api_router.include_router(conversations_router)
api_router.include_router(notifications_router)
