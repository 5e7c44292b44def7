"""
Service-level HTTP routes.
"""

from fastapi import APIRouter

from app.schemas import MessageResponse

router = APIRouter()


@router.get("/", response_model=MessageResponse)
async def read_root():
    """API health check endpoint."""
    return MessageResponse(message="Films API is running!")
