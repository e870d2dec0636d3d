from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4
from pydantic import BaseModel, Field


class ExtractionStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    FAILED = "Failed"


class ExtractionModel(BaseModel):
    id: str = Field(..., description="The unique identifier of the extraction record")
    url: str = Field(..., description="The URL the data is extracted from")
    status: str = Field(..., description="The status of the extraction process")  # noqa
    company_name: str | None = Field(
        None, description="Company name found on the page"  # noqa
    )
    data: dict[str, Any] | None = Field(
        None, description="The extracted company and product data"  # noqa
    )
    error_message: str | None = Field(
        None, description="Error message if the extraction failed"  # noqa
    )
    created_at: datetime = Field(
        default_factory=datetime.now, description="The creation timestamp of the record"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="The last update timestamp of the record",
    )

    class Config:
        from_attributes = True


class ExtractionCreateModel(BaseModel):
    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="The unique identifier of the extraction record",
    )
    url: str = Field(..., description="The URL the data is extracted from")
    status: str = Field(
        ExtractionStatus.PENDING.value,
        description="The status of the extraction process",
    )


class ExtractionUpdateModel(BaseModel):
    status: str | None = Field(None, description="The status of the extraction process")
    company_name: str | None = Field(
        None, description="Company name found on the page"
    )
    data: dict[str, Any] | None = Field(
        None, description="The extracted company and product data"
    )
    error_message: str | None = Field(
        None, description="Error message if the extraction failed"
    )
