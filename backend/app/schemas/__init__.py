# Pydantic schemas
from app.schemas.common import CamelModel
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    RefreshTokenRequest,
    UserResponse,
    LoginResponse,
)
from app.schemas.board import (
    BoardCreate,
    BoardUpdate,
    BoardResponse,
    BoardListItem,
    BoardListResponse,
    BoardDetailResponse,
)
from app.schemas.component import (
    Position,
    ComponentCreate,
    ComponentUpdate,
    ComponentResponse,
    ComponentListResponse,
    PositionUpdateItem,
)
from app.schemas.relationship import (
    RelationshipCreate,
    RelationshipUpdate,
    RelationshipResponse,
    RelationshipDetailResponse,
    RelationshipListResponse,
)
from app.schemas.cross_board_link import (
    CrossBoardLinkCreate,
    CrossBoardLinkUpdate,
    CrossBoardLinkResponse,
    CrossBoardLinkDetailResponse,
    CrossBoardLinkListResponse,
    TransitionResponse,
)
from app.schemas.reference_model import ReferenceModelResponse
