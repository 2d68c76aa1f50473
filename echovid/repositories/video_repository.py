"""Video metadata rows. record_video is the second step of an upload and runs only after the blob write."""
from dataclasses import dataclass

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from echovid.errors import DbFailure
from echovid.models.video import Video


@dataclass
class VideoMetadata:
    title: str
    publisher: str | None = None
    producer: str | None = None
    genre: str | None = None
    age_rating: str | None = None
    original_filename: str | None = None
    content_type: str | None = None


def record_video(
    db: Session,
    metadata: VideoMetadata,
    locator: str,
    object_name: str,
    creator_id: str,
) -> Video:
    """Insert and commit one Video row pointing at an already stored blob. DbFailure on error."""
    video = Video(
        title=metadata.title,
        publisher=metadata.publisher,
        producer=metadata.producer,
        genre=metadata.genre,
        age_rating=metadata.age_rating,
        original_filename=metadata.original_filename,
        content_type=metadata.content_type,
        blob_url=locator,
        object_name=object_name,
        creator_id=creator_id,
    )
    db.add(video)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise DbFailure(f"Could not record video metadata: {e}") from e
    db.refresh(video)
    return video


def list_videos(db: Session) -> list[Video]:
    """All videos, newest upload first."""
    return db.query(Video).order_by(desc(Video.uploaded_at)).all()


def video_exists(db: Session, video_id: str) -> bool:
    return db.query(Video.id).filter(Video.id == video_id).first() is not None
