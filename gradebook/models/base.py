# gradebook/models/base.py
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime
from sqlalchemy.dialects.postgresql import UUID


class BaseMixin:
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_on = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_on = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class OwnedMixin(BaseMixin):
    """Rows scoped to the teacher who owns them."""

    owner_id = Column(UUID(as_uuid=True), nullable=False, index=True)
