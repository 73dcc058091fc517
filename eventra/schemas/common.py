"""
Common Pydantic schemas
"""

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Optional, Tuple
from pydantic import AfterValidator, BaseModel, model_validator

class StandardResponse(BaseModel):
    """Standard API response"""
    success: bool
    message: str
    data: Optional[Any] = None

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC, matching the database columns"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]

class PartialUpdate(BaseModel):
    """Base for update bodies: every field may be omitted, but the ones
    listed in ``non_nullable`` map to NOT NULL columns and cannot be cleared.
    """
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_fields(self):
        nulls = [
            field for field in self.non_nullable
            if field in self.model_fields_set and getattr(self, field) is None
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self
