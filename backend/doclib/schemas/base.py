"""Shared pydantic base for wire schemas.

Python attributes are snake_case; JSON field names are camelCase
(``folderId``, ``documentCount``, ...) because that is what the web client
sends and reads.  Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base schema: camelCase aliases, populate by attribute name, ORM mode."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
