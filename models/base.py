"""
Base schemas shared by all models.

Field names are snake_case in Python and camelCase on the wire, matching
what the admin front end and the persisted pricing state already use.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - camelCase aliases, populated by either name
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True
    )


class FrozenSchema(BaseSchema):
    """Immutable schema for data loaded once per session."""
    model_config = ConfigDict(frozen=True)


class Notice(BaseSchema):
    """Transient user-facing message (toast)."""
    error: bool = False
    message: str
