"""
Unit Tests for the error hierarchy
"""
from app.core.exceptions import (
    FeafDashboardError,
    BoardNotFoundError,
    ComponentNotFoundError,
    CrossBoardLinkNotFoundError,
    InvalidComponentTypeError,
    InvalidTransitionError,
    UnknownComponentsError,
    ValidationError,
    error_response,
)


class TestExceptions:

    def test_not_found_messages(self):
        assert BoardNotFoundError("b-1").message == "Board with ID b-1 not found"
        assert BoardNotFoundError("b-1", message="Board not found").message == "Board not found"
        assert ComponentNotFoundError("c-1", role="Source").message == "Source component with ID c-1 not found"
        assert CrossBoardLinkNotFoundError("l-1").code == "CROSS_BOARD_LINK_NOT_FOUND"
        assert BoardNotFoundError("b-1").status_code == 404

    def test_validation_errors_are_400(self):
        error = InvalidComponentTypeError("APPLICATION", "PRM", ["KPI", "METRIC"])

        assert isinstance(error, ValidationError)
        assert error.status_code == 400
        assert error.details["valid_types"] == ["KPI", "METRIC"]
        assert error.details["field"] == "type"

    def test_invalid_transition_message(self):
        assert InvalidTransitionError("SRM", "PRM", []).message == (
            "Invalid transition from SRM to PRM. Valid targets for SRM are: none"
        )

    def test_unknown_components_details(self):
        error = UnknownComponentsError("b-1", ["c-9"])

        assert error.code == "UNKNOWN_COMPONENTS"
        assert error.details == {"board_id": "b-1", "component_ids": ["c-9"]}

    def test_error_response_shape(self):
        body = error_response(FeafDashboardError("boom"))

        assert body == {
            "detail": "boom",
            "error": {"code": "INTERNAL_ERROR", "message": "boom", "details": {}},
        }
