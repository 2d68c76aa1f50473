import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from echovid.database import Base


class UserRole(str, enum.Enum):
    CONSUMER = "Consumer"
    CREATOR = "Creator"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password = Column(String(255), nullable=False)  # argon2 hash, never plaintext
    role = Column(String(20), nullable=False, default=UserRole.CONSUMER.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
