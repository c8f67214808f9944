# app/schemas/users.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class RoleOut(BaseModel):
    role_id: int
    role_name: str

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    username: str
    user_email: EmailStr
    user_password: str
    user_full_name: str
    user_role_role_id: int
    user_description: Optional[str] = None


class UserUpdate(BaseModel):
    username: Optional[str] = None
    user_email: Optional[EmailStr] = None
    user_password: Optional[str] = None
    user_full_name: Optional[str] = None
    user_description: Optional[str] = None
    user_role_role_id: Optional[int] = None


class UserOut(BaseModel):
    # no password field: hashes never leave the API
    user_id: int
    username: Optional[str] = None
    user_email: Optional[str] = None
    user_full_name: Optional[str] = None
    user_description: Optional[str] = None
    user_image: Optional[str] = None
    user_role_role_id: Optional[int] = None
    role: Optional[RoleOut] = None
    user_is_deleted: bool = False
    user_input_date: Optional[datetime] = None
    user_last_update: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    user_full_name: Optional[str] = None
    user_description: Optional[str] = None
    user_email: Optional[EmailStr] = None


class ChangePasswordIn(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str
