"""Common base model shared across API payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names on the wire.

    Accepts both snake_case and camelCase on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
