from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for API payloads: camelCase on the wire, snake_case in Python.

    Request bodies accept either spelling; responses are rendered with the
    camelCase aliases by FastAPI.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
