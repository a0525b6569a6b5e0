from pydantic import BaseModel, Field
from typing import Optional

class CompanionProfileUpdate(BaseModel):
    firstName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    lastName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phoneNumber: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8)
