from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class VideoUploadRequest(BaseModel):
    """Upload body: metadata plus the file as base64 (optionally a data: URI)."""
    title: str = Field(min_length=1, max_length=255)
    publisher: str | None = Field(default=None, max_length=255)
    producer: str | None = Field(default=None, max_length=255)
    genre: str | None = Field(default=None, max_length=100)
    age_rating: str | None = Field(default=None, alias="ageRating", max_length=20)
    file_name: str = Field(alias="fileName", min_length=1, max_length=255)
    file_content: str = Field(alias="fileContent", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class VideoUploadResponse(BaseModel):
    message: str
    url: str


class VideoResponse(BaseModel):
    id: str
    title: str
    publisher: str | None
    producer: str | None
    genre: str | None
    age_rating: str | None = Field(alias="ageRating")
    blob_url: str = Field(alias="blobUrl")
    original_filename: str | None = Field(alias="fileName")
    content_type: str | None = Field(alias="contentType")
    creator_id: str = Field(alias="creatorId")
    uploaded_at: datetime = Field(alias="uploadedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
