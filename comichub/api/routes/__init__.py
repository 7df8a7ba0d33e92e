"""
API routes, mounted under the configured api prefix.
"""

from fastapi import APIRouter

from comichub.api.routes import admin, auth, engagement, news, recommendations

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(recommendations.router, prefix="/recommendations", tags=["Recommendations"])
router.include_router(engagement.router)
router.include_router(news.router, prefix="/news", tags=["News"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])
