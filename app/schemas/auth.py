from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from app.core.schemas import CamelModel
from app.database import MAX_ID
from app.models.user import UserRole
from datetime import datetime

class UserBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: UserRole = UserRole.EMPLOYEE
    department: Optional[str] = None

class RegisterRequest(UserBase):
    password: str = Field(..., min_length=6)
    manager_id: Optional[int] = Field(None, ge=1, le=MAX_ID)

class UserResponse(UserBase):
    id: int
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = None
    profile_picture: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)

class UserRoleUpdate(CamelModel):
    role: Optional[UserRole] = None
    manager_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
