"""
FEAF Reference Model Registry
=============================

The six Federal Enterprise Architecture Framework reference models and the
component types each one admits. The registry is static: it is built once at
import time and never mutated.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union, Any

from app.models.board import ReferenceModel


@dataclass(frozen=True)
class ReferenceModelDef:
    """Static description of one reference model"""
    id: str
    name: str
    short_name: str
    description: str
    component_types: Tuple[str, ...] = field(default_factory=tuple)
    icon: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "shortName": self.short_name,
            "description": self.description,
            "componentTypes": list(self.component_types),
            "icon": self.icon,
        }


REFERENCE_MODELS: Dict[ReferenceModel, ReferenceModelDef] = {
    ReferenceModel.PRM: ReferenceModelDef(
        id="PRM",
        name="Performance Reference Model",
        short_name="PRM",
        description=(
            "Provides metrics and Key Performance Indicators (KPIs) for enterprise "
            "performance measurement and tracking."
        ),
        component_types=("KPI", "METRIC", "MEASUREMENT_CATEGORY"),
        icon="📊",
    ),
    ReferenceModel.BRM: ReferenceModelDef(
        id="BRM",
        name="Business Reference Model",
        short_name="BRM",
        description="Represents the business functions, services, and capabilities of the enterprise.",
        component_types=("BUSINESS_FUNCTION", "SERVICE", "CAPABILITY"),
        icon="🏢",
    ),
    ReferenceModel.DRM: ReferenceModelDef(
        id="DRM",
        name="Data Reference Model",
        short_name="DRM",
        description="Defines the data entities, standards, and exchange formats used across the enterprise.",
        component_types=("DATA_ENTITY", "STANDARD", "EXCHANGE_FORMAT"),
        icon="📁",
    ),
    ReferenceModel.ARM: ReferenceModelDef(
        id="ARM",
        name="Application Reference Model",
        short_name="ARM",
        description="Describes the application portfolio and integration architecture of the enterprise.",
        component_types=("APPLICATION", "INTERFACE", "APPLICATION_SERVICE"),
        icon="⚙️",
    ),
    ReferenceModel.IRM: ReferenceModelDef(
        id="IRM",
        name="Infrastructure Reference Model",
        short_name="IRM",
        description="Represents infrastructure elements, platforms, and network components.",
        component_types=("INFRASTRUCTURE_ELEMENT", "PLATFORM", "NETWORK_COMPONENT"),
        icon="🖥️",
    ),
    ReferenceModel.SRM: ReferenceModelDef(
        id="SRM",
        name="Security Reference Model",
        short_name="SRM",
        description="Defines security controls, policies, and risk management elements.",
        component_types=("SECURITY_CONTROL", "POLICY", "RISK_ELEMENT"),
        icon="🔒",
    ),
}


def _coerce(model: Union[ReferenceModel, str, None]) -> Optional[ReferenceModel]:
    if isinstance(model, ReferenceModel):
        return model
    try:
        return ReferenceModel(model)
    except ValueError:
        return None


def get_all_models() -> List[ReferenceModelDef]:
    """All six models in canonical order (PRM, BRM, DRM, ARM, IRM, SRM)"""
    return list(REFERENCE_MODELS.values())


def get_model_by_id(model_id: Union[ReferenceModel, str]) -> Optional[ReferenceModelDef]:
    """Look up a model by id; None when the id is not a FEAF model"""
    model = _coerce(model_id)
    return REFERENCE_MODELS.get(model) if model else None


def get_component_types(model_id: Union[ReferenceModel, str]) -> List[str]:
    """Component types admitted by a model, empty for unknown ids"""
    definition = get_model_by_id(model_id)
    return list(definition.component_types) if definition else []


def is_valid_component_type(model_id: Union[ReferenceModel, str], component_type: str) -> bool:
    return component_type in get_component_types(model_id)
