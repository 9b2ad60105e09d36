"""Shared pydantic base for models serialised to the front-end."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys (``published_date`` -> ``publishedDate``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
