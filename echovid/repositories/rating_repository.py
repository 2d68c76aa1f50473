from sqlalchemy import func
from sqlalchemy.orm import Session

from echovid.errors import NotFound
from echovid.models.rating import Rating
from echovid.repositories.video_repository import video_exists


def add_rating(db: Session, video_id: str, user_id: str, rating: int) -> Rating:
    """Append a rating row. Earlier ratings by the same user are kept."""
    if not video_exists(db, video_id):
        raise NotFound("Video not found")
    row = Rating(video_id=video_id, user_id=user_id, rating=rating)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def rating_summary(db: Session, video_id: str) -> tuple[float | None, int]:
    """(average, count) over every rating row of the video; average is None when there are none."""
    avg, total = (
        db.query(func.avg(Rating.rating), func.count(Rating.id))
        .filter(Rating.video_id == video_id)
        .one()
    )
    return (float(avg) if avg is not None else None), int(total or 0)
