from datetime import datetime
from pydantic import BaseModel, Field


class ExtractionState(BaseModel):
    paused: bool = Field(False, description="Whether the extraction is paused")
    stopped: bool = Field(False, description="Whether the extraction was stopped")
    url: str | None = Field(None, description="The URL being extracted")
    start_time: datetime = Field(
        default_factory=datetime.now,
        description="When the extraction started",
    )
    progress: int = Field(0, ge=0, le=100, description="Progress percentage")
    stage: str = Field("Initializing", description="Current stage label")
