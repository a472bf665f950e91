"""Base Pydantic model configuration for btx wire and request models.

All btx models inherit from BTxBaseModel to ensure consistent behavior:
- Immutability (frozen=True) so values can be shared across threads
- Strict validation (extra="forbid") to catch typos and invalid fields
- Flexible field naming (populate_by_name=True) for alias support
"""

from pydantic import BaseModel, ConfigDict


class BTxBaseModel(BaseModel):
    """Base model for all btx entities.

    Example:
        >>> class Point(BTxBaseModel):
        ...     x: int
        >>> p = Point(x=1)
        >>> p.x = 2  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        validate_default=True,
    )
