# app/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema for payloads consumed by the dashboard frontend.

    Attributes stay snake_case in Python; the JSON representation uses
    camelCase keys (e.g. `month_key` -> `monthKey`). Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
