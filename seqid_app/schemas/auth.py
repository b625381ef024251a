from pydantic import BaseModel, Field
from typing import Optional


class LoginRequest(BaseModel):
    user_id: str = Field(..., description="User ID, either digits only or with the prefix")
    password: Optional[str] = Field(None, description="Required for the admin user only")


class SessionInfo(BaseModel):
    user_id: str
    is_admin: bool
    heartbeat_interval_seconds: int
