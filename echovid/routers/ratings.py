from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from echovid.auth import get_current_principal
from echovid.database import get_db
from echovid.repositories.rating_repository import add_rating, rating_summary
from echovid.schemas.rating import RatingCreate, RatingSummary
from echovid.schemas.user import MessageResponse, TokenPayload

router = APIRouter(tags=["ratings"])


@router.post("/rate", response_model=MessageResponse)
def rate(
    body: RatingCreate,
    principal: TokenPayload = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    add_rating(db, body.video_id, principal.sub, body.rating)
    return MessageResponse(message="Rating submitted")


@router.get("/getRatings/{video_id}", response_model=RatingSummary)
def get_ratings(video_id: str, db: Session = Depends(get_db)):
    avg, total = rating_summary(db, video_id)
    return RatingSummary(avg_rating=avg, total_ratings=total)
