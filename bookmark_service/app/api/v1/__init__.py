from fastapi import APIRouter

from .bookmarks import router as bookmarks_router

api_router = APIRouter()
api_router.include_router(bookmarks_router, prefix="/bookmarks", tags=["bookmarks"])
