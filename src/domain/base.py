"""Base classes shared by all domain entities"""

import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a string UUID4 primary key"""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Timezone-aware current UTC time for audit columns"""
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Base for persisted entities (SQLModel metadata is shared)"""

    pass
