"""
Allowed cross-board link directions between reference models.

A link from a component on a board of model A to a component on a board of
model B is valid only if B is listed under A. The table is directed: the
reverse pair is not implied.
"""

from typing import Dict, List, Union, Any

from app.models.board import ReferenceModel


VALID_TRANSITIONS: Dict[ReferenceModel, List[ReferenceModel]] = {
    ReferenceModel.PRM: [ReferenceModel.BRM, ReferenceModel.DRM],
    ReferenceModel.BRM: [ReferenceModel.ARM, ReferenceModel.IRM],
    ReferenceModel.DRM: [ReferenceModel.ARM, ReferenceModel.IRM],
    ReferenceModel.ARM: [ReferenceModel.IRM, ReferenceModel.SRM],
    ReferenceModel.IRM: [ReferenceModel.SRM],
    ReferenceModel.SRM: [],
}


def get_valid_targets(source: Union[ReferenceModel, str]) -> List[ReferenceModel]:
    try:
        return list(VALID_TRANSITIONS.get(ReferenceModel(source), []))
    except ValueError:
        return []


def is_valid_transition(source: Union[ReferenceModel, str], target: Union[ReferenceModel, str]) -> bool:
    """True iff a link from a ``source``-model board to a ``target``-model board is allowed"""
    try:
        return ReferenceModel(target) in get_valid_targets(source)
    except ValueError:
        return False


def get_valid_transitions() -> List[Dict[str, Any]]:
    """The whole table as ``[{"from": "PRM", "to": ["BRM", "DRM"]}, ...]``"""
    return [
        {"from": source.value, "to": [target.value for target in targets]}
        for source, targets in VALID_TRANSITIONS.items()
    ]
