"""Structure and file content request schemas."""
from pydantic import BaseModel, ConfigDict, Field


class FileContentRequest(BaseModel):
    """Batch file read request."""
    model_config = ConfigDict(populate_by_name=True)

    base_path: str = Field(..., alias="basePath", description="Directory the files are relative to")
    files: list[str] = Field(..., description="Relative file paths")
