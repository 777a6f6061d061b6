from fastapi import APIRouter
from app.routers import dashboard, records, session

# Centralized API router hub
# Fixed-prefix routers go first so /{collection} does not swallow them.
api_router = APIRouter()

api_router.include_router(session.router)
api_router.include_router(dashboard.router)
api_router.include_router(records.router)
