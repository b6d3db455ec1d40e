from datetime import datetime, timezone
from typing import Optional
import uuid


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp (timezone-aware)"""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops the offset on read)"""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)


def new_id() -> str:
    """Generate a new record id"""
    return str(uuid.uuid4())
