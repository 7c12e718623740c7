"""Settings schemas."""
from pydantic import BaseModel, Field


class IgnorePatterns(BaseModel):
    """Global ignore patterns applied to every workspace."""
    patterns: list[str] = Field(default_factory=list)
