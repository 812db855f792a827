from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    # Blank values are rejected by the route with a 400
    username: Optional[str] = Field("", description="Account username")
    password: Optional[str] = Field("", description="Account password")


class Token(BaseModel):
    token: str


class TokenData(BaseModel):
    """Claims carried by a verified access token"""

    id: int
    username: str
    role: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    username: str
    role: str
    is_active: bool

    class Config:
        from_attributes = True
