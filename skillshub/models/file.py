# file.py
import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from skillshub.db.database import Base
from skillshub.utils.helpers import utcnow


class FileObject(Base):
    __tablename__ = "file_objects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    bucket_key = Column(String(500), unique=True, nullable=False)
    content_type = Column(String(150), nullable=False)
    size_bytes = Column(Integer, nullable=False)
    etag = Column(String(200), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
