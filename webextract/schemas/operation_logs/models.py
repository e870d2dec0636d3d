from datetime import datetime
from pydantic import BaseModel, Field


class OperationLogModel(BaseModel):
    id: int = Field(..., description="Sequential identifier of the log entry")
    url: str = Field(..., description="URL the logged operation ran against")
    extraction_id: str | None = Field(
        None, description="Extraction identifier the entry belongs to"  # noqa
    )
    category: str = Field(..., description="Operation or error category")
    event: str = Field(..., description="Started, Completed, Failed or Error")
    message: str | None = Field(None, description="Human readable message")
    duration_ms: int | None = Field(
        None, description="Duration of the operation in milliseconds"  # noqa
    )
    stack_trace: str | None = Field(None, description="Stack trace of an error")
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when the entry was written",
    )

    class Config:
        from_attributes = True


class OperationLogCreateModel(BaseModel):
    url: str = Field(..., description="URL the logged operation ran against")
    extraction_id: str | None = Field(
        None, description="Extraction identifier the entry belongs to"
    )
    category: str = Field(..., description="Operation or error category")
    event: str = Field(..., description="Started, Completed, Failed or Error")
    message: str | None = Field(None, description="Human readable message")
    duration_ms: int | None = Field(
        None, description="Duration of the operation in milliseconds"
    )
    stack_trace: str | None = Field(None, description="Stack trace of an error")
