"""Video metadata. The media itself lives in the blob store under object_name; blob_url is its locator."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from echovid.database import Base


class Video(Base):
    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    publisher = Column(String(255), nullable=True)
    producer = Column(String(255), nullable=True)
    genre = Column(String(100), nullable=True)
    age_rating = Column(String(20), nullable=True)
    blob_url = Column(String(1024), nullable=False)
    object_name = Column(String(512), nullable=False)  # key inside the container/bucket
    original_filename = Column(String(255), nullable=True)
    content_type = Column(String(100), nullable=True)  # video/mp4 etc
    creator_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    uploaded_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
