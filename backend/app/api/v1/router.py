from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth,
    boards,
    components,
    relationships,
    cross_board_links,
    reference_models,
    health,
)

api_router = APIRouter()

# Probes
api_router.include_router(health.router, prefix="/health", tags=["Health"])

# Public
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(reference_models.router, prefix="/reference-models", tags=["Reference Models"])

# Board-scoped (authenticated)
api_router.include_router(boards.router, prefix="/boards", tags=["Boards"])
api_router.include_router(components.router, prefix="/boards", tags=["Components"])
api_router.include_router(relationships.router, prefix="/boards", tags=["Relationships"])
api_router.include_router(cross_board_links.router, prefix="/cross-board-links", tags=["Cross-Board Links"])
