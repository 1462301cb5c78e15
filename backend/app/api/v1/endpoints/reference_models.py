from fastapi import APIRouter
from typing import List

from app.core.exceptions import ReferenceModelNotFoundError
from app.modules.feaf.reference_models import get_all_models, get_model_by_id
from app.schemas.reference_model import ReferenceModelResponse

router = APIRouter()


@router.get("", response_model=List[ReferenceModelResponse])
async def list_reference_models():
    """The six FEAF reference models with their component types"""
    return [model.to_dict() for model in get_all_models()]


@router.get("/{model_id}", response_model=ReferenceModelResponse)
async def get_reference_model(model_id: str):
    model = get_model_by_id(model_id)
    if not model:
        raise ReferenceModelNotFoundError(model_id)
    return model.to_dict()
