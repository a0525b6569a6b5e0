from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

class WaitlistIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=100)
    phoneNumber: str = Field(min_length=1, max_length=20)
    tripType: str = Field(min_length=1, max_length=100)
    additionalInformation: str = Field(default="", max_length=1000)

class WaitlistPatch(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=100)
    phoneNumber: Optional[str] = Field(default=None, min_length=1, max_length=20)
    tripType: Optional[str] = Field(default=None, min_length=1, max_length=100)
    additionalInformation: Optional[str] = Field(default=None, max_length=1000)

class NewsletterIn(BaseModel):
    email: str = Field(min_length=3, max_length=100)

class ContactIn(BaseModel):
    fullName: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=100)
    dreamDestination: str = Field(min_length=1, max_length=100)
    travelDate: date
    story: str = Field(min_length=1, max_length=2000)

class ContactPatch(BaseModel):
    fullName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=100)
    dreamDestination: Optional[str] = Field(default=None, min_length=1, max_length=100)
    travelDate: Optional[date] = None
    story: Optional[str] = Field(default=None, min_length=1, max_length=2000)
