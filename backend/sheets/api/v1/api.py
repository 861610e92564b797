from fastapi import APIRouter
from .endpoints import sheets_router

api_router = APIRouter()

api_router.include_router(sheets_router, tags=["sheets"])
