"""
Blob stores for uploaded media. upload() returns the public locator of the stored object;
delete() removes it again (used to compensate a failed metadata write).
Every backend error is raised as StorageFailure with the original exception chained.
"""
import logging
import mimetypes
import os
import uuid
from datetime import datetime
from pathlib import Path

from fastapi import Request

from echovid.config import Settings
from echovid.errors import StorageFailure

logger = logging.getLogger(__name__)

DEFAULT_VIDEO_CONTENT_TYPE = "video/mp4"
CHUNK_SIZE = 1024 * 1024  # 1 MB
LOCAL_MEDIA_MOUNT = "/media"  # where main serves local_blob_dir

# mimetypes does not know every container browsers can play
EXTRA_VIDEO_TYPES = {
    ".mkv": "video/x-matroska",
    ".m4v": "video/mp4",
    ".ogv": "video/ogg",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
}


def video_content_type(file_name: str) -> str:
    """Content type for a video file name; falls back to video/mp4 so browsers play it inline."""
    ext = Path(file_name or "").suffix.lower()
    if ext in EXTRA_VIDEO_TYPES:
        return EXTRA_VIDEO_TYPES[ext]
    guessed, _ = mimetypes.guess_type(file_name or "")
    if guessed and guessed.startswith("video/"):
        return guessed
    return DEFAULT_VIDEO_CONTENT_TYPE


def generate_object_name(original_filename: str, prefix: str = "videos") -> str:
    """Unique object name so two uploads of the same file name never overwrite each other."""
    ext = Path(original_filename or "").suffix.lower()
    if not ext or len(ext) > 10:
        ext = ".mp4"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    unique_id = str(uuid.uuid4())[:8]
    return f"{prefix}/{timestamp}_{unique_id}{ext}"


class BlobStore:
    def upload(self, object_name: str, data: bytes, content_type: str) -> str:
        raise NotImplementedError

    def delete(self, object_name: str) -> None:
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Stores objects as files under root; public_base_url must point at where root is served."""

    def __init__(self, root: Path, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _path(self, object_name: str) -> Path:
        base = self.root.resolve()
        full = (base / object_name).resolve()
        try:
            full.relative_to(base)
        except ValueError as e:
            raise StorageFailure(f"Invalid object name: {object_name}") from e
        return full

    def upload(self, object_name: str, data: bytes, content_type: str) -> str:
        path = self._path(object_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            f = path.open("wb")
        except OSError as e:
            raise StorageFailure(f"Failed to write {object_name}: {e}") from e
        try:
            with f:
                for start in range(0, len(data), CHUNK_SIZE):
                    f.write(data[start:start + CHUNK_SIZE])
        except OSError as e:
            self._discard(path, object_name)
            raise StorageFailure(f"Failed to write {object_name}: {e}") from e
        logger.info("Stored %s (%d bytes, %s) on local disk", object_name, len(data), content_type)
        return f"{self.public_base_url}/{object_name}"

    def _discard(self, path: Path, object_name: str) -> None:
        """Remove a partially written file; a failed write leaves nothing behind."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.critical("Partial blob %s left on disk after failed write: %s", object_name, e)

    def delete(self, object_name: str) -> None:
        path = self._path(object_name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageFailure(f"Failed to delete {object_name}: {e}") from e


class GcsBlobStore(BlobStore):
    """Google Cloud Storage bucket. Objects are made public; locator is under public_base_url when set."""

    def __init__(
        self,
        bucket_name: str,
        credentials_path: str = "",
        public_base_url: str = "",
        bucket=None,
    ):
        self.public_base_url = public_base_url.rstrip("/")
        if bucket is not None:
            self.client = None
            self.bucket = bucket
            return

        from google.cloud import storage
        from google.oauth2 import service_account

        if not bucket_name:
            raise ValueError("GCS_BUCKET_NAME is required when BLOB_BACKEND=gcs")

        if credentials_path:
            # Make path absolute if it's relative
            if not os.path.isabs(credentials_path):
                credentials_path = os.path.join(os.getcwd(), credentials_path)
            if not os.path.exists(credentials_path):
                raise ValueError(f"GCS credentials file not found at: {credentials_path}")
            credentials = service_account.Credentials.from_service_account_file(credentials_path)
            self.client = storage.Client(credentials=credentials)
        else:
            self.client = storage.Client()
        self.bucket = self.client.bucket(bucket_name)

    def upload(self, object_name: str, data: bytes, content_type: str) -> str:
        from google.api_core.exceptions import GoogleAPIError
        from google.auth.exceptions import GoogleAuthError

        blob = self.bucket.blob(object_name)
        try:
            blob.upload_from_string(data, content_type=content_type)
            # fails with 400 on buckets with uniform bucket-level access
            blob.make_public()
        except (GoogleAPIError, GoogleAuthError, OSError) as e:
            self._discard(blob, object_name)
            raise StorageFailure(f"Failed to upload {object_name}: {e}") from e
        logger.info("Uploaded %s (%d bytes, %s) to gs://%s", object_name, len(data), content_type, self.bucket.name)
        if self.public_base_url:
            return f"{self.public_base_url}/{object_name}"
        return blob.public_url

    def _discard(self, blob, object_name: str) -> None:
        """Best-effort removal of an object a failed upload may have written."""
        from google.api_core.exceptions import GoogleAPIError, NotFound
        from google.auth.exceptions import GoogleAuthError

        try:
            blob.delete()
        except NotFound:
            return
        except (GoogleAPIError, GoogleAuthError, OSError) as e:
            logger.critical("Partial blob gs://%s/%s left after failed upload: %s", self.bucket.name, object_name, e)
        else:
            logger.warning("Removed partially uploaded %s", object_name)

    def delete(self, object_name: str) -> None:
        from google.api_core.exceptions import GoogleAPIError, NotFound
        from google.auth.exceptions import GoogleAuthError

        try:
            self.bucket.blob(object_name).delete()
        except NotFound:
            return
        except (GoogleAPIError, GoogleAuthError, OSError) as e:
            raise StorageFailure(f"Failed to delete {object_name}: {e}") from e


def local_blob_dir(settings: Settings) -> Path:
    if settings.local_blob_dir:
        return Path(settings.local_blob_dir)
    return Path(__file__).resolve().parent.parent.parent / "uploads" / "media"


def build_blob_store(settings: Settings) -> BlobStore:
    if settings.blob_backend == "gcs":
        return GcsBlobStore(
            settings.gcs_bucket_name,
            credentials_path=settings.gcs_credentials_path,
            public_base_url=settings.public_base_url,
        )
    root = local_blob_dir(settings)
    root.mkdir(parents=True, exist_ok=True)
    base_url = settings.public_base_url or f"http://localhost:{settings.port}{LOCAL_MEDIA_MOUNT}"
    return LocalBlobStore(root, base_url)


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store
