"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from chatapp.api.routes import auth, messages, admin

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(messages.router)
api_router.include_router(admin.router)
