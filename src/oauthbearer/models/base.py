"""Base Pydantic model configuration for OAUTHBEARER models.

All models inherit from OAuthBearerBaseModel to ensure consistent behavior:
- Immutability (frozen=True) so parsed messages and evidence can be shared
  across threads
- Strict validation (extra="forbid") to catch typos and invalid fields
- Flexible field naming (populate_by_name=True) for alias support
"""

from pydantic import BaseModel, ConfigDict


class OAuthBearerBaseModel(BaseModel):
    """Base model for all OAUTHBEARER entities.

    Example:
        >>> class MyModel(OAuthBearerBaseModel):
        ...     name: str
        >>>
        >>> obj = MyModel(name="test")
        >>> obj.name = "other"  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        # Immutability: prevents accidental mutations after creation
        frozen=True,

        # Strict validation: reject unknown fields to catch typos
        extra="forbid",

        # Allow populating fields by both name and alias
        populate_by_name=True,

        # Validate default values
        validate_default=True,
    )
