"""
Shared pydantic base model.

Procedure payloads use camelCase keys on the wire while Python code
uses snake_case attributes.  ``CamelModel`` accepts either form on
input and serializes with aliases by default through the transport.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
