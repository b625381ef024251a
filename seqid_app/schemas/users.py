from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserProfile(BaseModel):
    """
    Persisted per-user profile.
    
    total_ids and total_searches only ever grow, and only through a save.
    """
    user_id: str
    total_ids: int = 0
    total_searches: int = 0
    created_at: datetime
    last_login: Optional[datetime] = None
    last_login_date: Optional[str] = None
    last_active: Optional[datetime] = None


class UserStats(BaseModel):
    total: int = Field(..., description="Unique IDs saved overall")
    today: int = Field(..., description="Unique IDs saved today")
    searches: int = Field(..., description="Execute actions overall")


class UserSummary(BaseModel):
    """Admin view of a user; today_ids is derived from records on read"""
    id: str
    total_ids: int
    today_ids: int
    searches: int
    last_active: Optional[datetime] = None
