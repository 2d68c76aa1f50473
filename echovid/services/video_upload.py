"""
Upload saga: blob write first, then the metadata row. If the row cannot be written the blob
is deleted again; if that delete fails too the orphan is logged at CRITICAL for an operator.
"""
import base64
import binascii
import logging

from sqlalchemy.orm import Session

from echovid.errors import DbFailure, StorageFailure, ValidationFailure
from echovid.models.video import Video
from echovid.repositories.video_repository import VideoMetadata, record_video
from echovid.schemas.video import VideoUploadRequest
from echovid.services.blob_storage import BlobStore, generate_object_name, video_content_type

logger = logging.getLogger(__name__)


def decode_file_content(file_content: str) -> bytes:
    """Base64 payload, with or without a data: URI prefix (e.g. "data:video/mp4;base64,")."""
    if file_content.startswith("data:") and "," in file_content:
        file_content = file_content.split(",", 1)[1]
    try:
        data = base64.b64decode(file_content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationFailure("fileContent is not valid base64") from e
    if not data:
        raise ValidationFailure("fileContent is empty")
    return data


def publish_video(db: Session, store: BlobStore, creator_id: str, body: VideoUploadRequest) -> Video:
    data = decode_file_content(body.file_content)
    object_name = generate_object_name(body.file_name)
    content_type = video_content_type(body.file_name)

    # StorageFailure propagates; nothing has been written yet
    locator = store.upload(object_name, data, content_type)

    metadata = VideoMetadata(
        title=body.title,
        publisher=body.publisher,
        producer=body.producer,
        genre=body.genre,
        age_rating=body.age_rating,
        original_filename=body.file_name,
        content_type=content_type,
    )
    try:
        video = record_video(db, metadata, locator, object_name, creator_id)
    except DbFailure:
        logger.error("Metadata write failed for %s; deleting uploaded blob", object_name)
        try:
            store.delete(object_name)
        except StorageFailure as e:
            logger.critical(
                "Orphaned blob %s (%s): metadata write and compensating delete both failed: %s",
                object_name, locator, e,
            )
        else:
            logger.info("Compensating delete of %s succeeded", object_name)
        raise

    logger.info("Video %s uploaded by %s at %s", video.id, creator_id, locator)
    return video
