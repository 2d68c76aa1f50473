from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentCreate(BaseModel):
    video_id: str = Field(alias="videoId")
    comment: str = Field(max_length=2000)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment must not be empty")
        return v


class CommentResponse(BaseModel):
    comment_text: str = Field(alias="commentText")
    name: str
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)
