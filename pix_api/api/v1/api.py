# Fichier: pix_api/api/v1/api.py
from fastapi import APIRouter
from .endpoints import (
    answer_router,
    authentication_router,
    cache_router,
    challenge_router,
    course_group_router,
    user_router,
)

api_router = APIRouter()

api_router.include_router(answer_router.router, prefix="/answers", tags=["Answers"])
api_router.include_router(authentication_router.router, prefix="/authentications", tags=["Authentications"])
api_router.include_router(user_router.router, prefix="/users", tags=["Users"])
api_router.include_router(course_group_router.router, prefix="/course-groups", tags=["Content"])
api_router.include_router(challenge_router.router, prefix="/challenges", tags=["Content"])
api_router.include_router(cache_router.router, prefix="/cache", tags=["Cache"])
