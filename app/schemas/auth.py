from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

from app.models.enums import Gender

class SignupRequest(BaseModel):
    firstName: str = Field(min_length=1, max_length=100)
    lastName: str = Field(min_length=1, max_length=100)
    email: str  # plain str to allow .local and other dev domains
    password: str = Field(min_length=8)
    gender: Optional[Gender] = None
    phoneNumber: str = ""
    dateOfBirth: Optional[date] = None

class AdminSignupRequest(BaseModel):
    firstName: str = Field(min_length=1, max_length=100)
    lastName: str = Field(min_length=1, max_length=100)
    email: str
    password: str = Field(min_length=8)
    phoneNumber: str = ""

class LoginRequest(BaseModel):
    email: str
    password: str

class EmailRequest(BaseModel):
    email: str

class OtpRequest(BaseModel):
    email: str
    otp: str

class ResetPasswordRequest(BaseModel):
    email: str
    newPassword: str = Field(min_length=8)

class ChangePasswordRequest(BaseModel):
    oldPassword: str
    newPassword: str = Field(min_length=8)

class CompanionLoginRequest(BaseModel):
    email: str
    password: str

class CompleteRegistrationRequest(BaseModel):
    email: str
    tempPassword: str
    newPassword: str = Field(min_length=8)
