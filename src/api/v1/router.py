from fastapi import APIRouter

from .endpoints import auth, health, news

api_router = APIRouter()

# /health itself is mounted at the root in main.py
api_router.include_router(health.status_router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
