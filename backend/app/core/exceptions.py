"""
Custom Exceptions for the FEAF Dashboard
========================================

Services raise these instead of HTTPException so that the same rules can be
exercised directly in tests. A single handler in app.main turns them into
JSON responses using ``status_code``.

Usage:
    from app.core.exceptions import BoardNotFoundError, AuthorizationError

    if not board:
        raise BoardNotFoundError(board_id)
    if board.user_id != user_id:
        raise AuthorizationError("You do not have access to this board")
"""

from typing import Optional, Any, Dict, List


class FeafDashboardError(Exception):
    """Base exception for all FEAF Dashboard errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(FeafDashboardError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(FeafDashboardError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(FeafDashboardError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str, label: Optional[str] = None):
        super().__init__(
            f"{label or resource_type} with ID {resource_id} not found",
            code=f"{resource_type.upper().replace(' ', '_').replace('-', '_')}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class BoardNotFoundError(ResourceNotFoundError):
    """Board not found"""

    def __init__(self, board_id: str, message: Optional[str] = None):
        super().__init__("Board", board_id)
        if message:
            self.message = message
            self.args = (message,)


class ComponentNotFoundError(ResourceNotFoundError):
    """Component not found; ``role`` is 'Source' / 'Target' for edge endpoints"""

    def __init__(self, component_id: str, role: Optional[str] = None):
        label = f"{role} component" if role else "Component"
        super().__init__("Component", component_id, label=label)


class RelationshipNotFoundError(ResourceNotFoundError):
    """Relationship not found"""

    def __init__(self, relationship_id: str):
        super().__init__("Relationship", relationship_id)


class CrossBoardLinkNotFoundError(ResourceNotFoundError):
    """Cross-board link not found"""

    def __init__(self, link_id: str):
        super().__init__("Cross-board link", link_id)


class ReferenceModelNotFoundError(ResourceNotFoundError):
    """Reference model id is not one of the six FEAF models"""

    def __init__(self, model_id: str):
        super().__init__("Reference model", model_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(FeafDashboardError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DuplicateBoardNameError(ValidationError):
    """Owner already has a board with this name"""

    def __init__(self, name: str):
        super().__init__("You already have a board with this name", field="name")
        self.code = "DUPLICATE_BOARD_NAME"
        self.details["name"] = name


class InvalidComponentTypeError(ValidationError):
    """Component type is not allowed by the board's reference model"""

    def __init__(self, component_type: str, reference_model: str, valid_types: List[str]):
        super().__init__(
            f"Component type {component_type} is not valid for {reference_model} model. "
            f"Valid types: {', '.join(valid_types)}",
            field="type"
        )
        self.code = "INVALID_COMPONENT_TYPE"
        self.details.update({
            "type": component_type,
            "reference_model": reference_model,
            "valid_types": list(valid_types),
        })


class InvalidRelationshipPairError(ValidationError):
    """Relationship endpoints are not both on the board"""

    def __init__(self):
        super().__init__("Both components must belong to the same board")
        self.code = "INVALID_RELATIONSHIP_PAIR"


class SelfLoopError(ValidationError):
    """Relationship from a component to itself"""

    def __init__(self):
        super().__init__("A component cannot have a relationship with itself")
        self.code = "SELF_LOOP"


class DuplicateRelationshipError(ValidationError):
    """Ordered (source, target) pair already connected"""

    def __init__(self):
        super().__init__("Relationship already exists between these components")
        self.code = "DUPLICATE_RELATIONSHIP"


class DifferentBoardsRequiredError(ValidationError):
    """Cross-board link endpoints share a board"""

    def __init__(self):
        super().__init__("Components must be on different boards for a cross-board link")
        self.code = "SAME_BOARD_LINK"


class InvalidTransitionError(ValidationError):
    """Reference model pair is not in the transition table"""

    def __init__(self, source_model: str, target_model: str, valid_targets: List[str]):
        super().__init__(
            f"Invalid transition from {source_model} to {target_model}. "
            f"Valid targets for {source_model} are: {', '.join(valid_targets) or 'none'}"
        )
        self.code = "INVALID_TRANSITION"
        self.details = {
            "from": source_model,
            "to": target_model,
            "valid_targets": list(valid_targets),
        }


class DuplicateCrossBoardLinkError(ValidationError):
    """Ordered component pair already linked"""

    def __init__(self):
        super().__init__("Cross-board link already exists between these components")
        self.code = "DUPLICATE_CROSS_BOARD_LINK"


class InvalidExportFormatError(ValidationError):
    """Export format other than json / csv"""

    def __init__(self, export_format: str):
        super().__init__("Invalid export format", field="format")
        self.code = "INVALID_EXPORT_FORMAT"
        self.details["format"] = export_format


class UnknownComponentsError(ValidationError):
    """Bulk update references components that are not on the board"""

    def __init__(self, board_id: str, component_ids: List[str]):
        super().__init__(
            f"Components not found on board {board_id}: {', '.join(component_ids)}"
        )
        self.code = "UNKNOWN_COMPONENTS"
        self.details.update({"board_id": board_id, "component_ids": list(component_ids)})


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: FeafDashboardError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "detail": error.message,
        "error": error.to_dict()
    }
