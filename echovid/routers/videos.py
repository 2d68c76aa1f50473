"""
Video upload (Creator only) and public listing.
Upload body carries the file as base64; the blob goes to the configured store, then the row is written.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from echovid.auth import require_role
from echovid.database import get_db
from echovid.models.user import UserRole
from echovid.repositories.video_repository import list_videos
from echovid.schemas.user import TokenPayload
from echovid.schemas.video import VideoResponse, VideoUploadRequest, VideoUploadResponse
from echovid.services.blob_storage import BlobStore, get_blob_store
from echovid.services.video_upload import publish_video

router = APIRouter(tags=["videos"])


@router.post("/upload", response_model=VideoUploadResponse)
def upload_video(
    body: VideoUploadRequest,
    creator: TokenPayload = Depends(require_role(UserRole.CREATOR)),
    db: Session = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    video = publish_video(db, store, creator.sub, body)
    return VideoUploadResponse(message="Video uploaded successfully", url=video.blob_url)


@router.get("/getVideos", response_model=list[VideoResponse])
def get_videos(db: Session = Depends(get_db)):
    """All videos, newest upload first."""
    return [VideoResponse.model_validate(v) for v in list_videos(db)]
