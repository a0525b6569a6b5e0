from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

from app.models.enums import Gender, MaritalStatus

class UserProfileUpdate(BaseModel):
    firstName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    lastName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phoneNumber: Optional[str] = None
    gender: Optional[Gender] = None
    dateOfBirth: Optional[date] = None
    maritalStatus: Optional[MaritalStatus] = None
    anniversaryDate: Optional[date] = None
    address: Optional[str] = None
    instagramUsername: Optional[str] = None

class AdminUserUpdate(UserProfileUpdate):
    """Fields an admin may change on any user, including verification flags."""
    isVerified: Optional[bool] = None
    twoFactorEnabled: Optional[bool] = None
    isActive: Optional[bool] = None

class AdminProfileUpdate(BaseModel):
    firstName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    lastName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phoneNumber: Optional[str] = None
    gender: Optional[Gender] = None
    address: Optional[str] = None
