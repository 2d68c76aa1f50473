from pydantic import BaseModel, ConfigDict, Field

MIN_RATING = 1
MAX_RATING = 5


class RatingCreate(BaseModel):
    video_id: str = Field(alias="videoId")
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)

    model_config = ConfigDict(populate_by_name=True)


class RatingSummary(BaseModel):
    avg_rating: float | None = Field(alias="avgRating")  # None when the video has no ratings
    total_ratings: int = Field(alias="totalRatings")

    model_config = ConfigDict(populate_by_name=True)
