# FEAF domain rules: reference model registry and cross-model transitions

from app.modules.feaf.reference_models import (
    ReferenceModelDef,
    REFERENCE_MODELS,
    get_all_models,
    get_model_by_id,
    get_component_types,
    is_valid_component_type,
)
from app.modules.feaf.transitions import (
    VALID_TRANSITIONS,
    is_valid_transition,
    get_valid_targets,
    get_valid_transitions,
)

__all__ = [
    "ReferenceModelDef",
    "REFERENCE_MODELS",
    "get_all_models",
    "get_model_by_id",
    "get_component_types",
    "is_valid_component_type",
    "VALID_TRANSITIONS",
    "is_valid_transition",
    "get_valid_targets",
    "get_valid_transitions",
]
