"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from portal.api.routes.auth_routes import router as auth_router
from portal.api.routes.student_routes import router as student_router
from portal.api.routes.result_routes import router as result_router
from portal.api.routes.placement_routes import router as placement_router
from portal.api.routes.material_routes import router as material_router, files_router
from portal.api.routes.chat_routes import router as chat_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(result_router)
api_router.include_router(placement_router)
api_router.include_router(material_router)
api_router.include_router(files_router)
api_router.include_router(chat_router)
