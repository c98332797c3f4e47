from pydantic import BaseModel, Field, model_validator
from typing import Optional, Dict, Any


class ImageRequest(BaseModel):
    width: int = Field(ge=1)
    height: int = Field(ge=1)


class FetchedImage(BaseModel):
    data: bytes = Field(min_length=1)
    content_type: str = "image/png"


class StoredFile(BaseModel):
    filename: str
    file_path: str
    public_url: str


class BatchRequest(BaseModel):
    count: int = 10


class BatchResult(BaseModel):
    requested: int = Field(ge=0)
    succeeded: int = Field(ge=0)

    @model_validator(mode="after")
    def _succeeded_within_requested(self) -> "BatchResult":
        if self.succeeded > self.requested:
            raise ValueError("succeeded cannot exceed requested")
        return self


class BatchResponse(BatchResult):
    message: str


class AssetData(BaseModel):
    asset_id: str
    title: str
    filename: str
    url: str
    mime_type: str
    status: str
    created_at: str
    metadata: Dict[str, Any]
    thumbnails: Dict[str, str]
    metadata_generated_at: Optional[str] = None


class StatsResponse(BaseModel):
    total: int
    total_size_bytes: int
    with_thumbnails: int
