"""
Shared pydantic base for camelCase wire models.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase on input, emits camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable result value object."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
