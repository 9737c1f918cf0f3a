"""Shared pydantic base for models exchanged with the browser client."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON field names are camelCase while Python names stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())
