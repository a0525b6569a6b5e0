from pydantic import BaseModel, Field
from typing import List, Optional

class Attachment(BaseModel):
    name: str
    size: int = Field(ge=0)
    type: str
    link: str
    key: Optional[str] = None

class ReviewIn(BaseModel):
    fullName: str = Field(min_length=1, max_length=100)
    review: str = Field(min_length=1, max_length=1000)
    rating: int = Field(ge=1, le=5)
    images: List[Attachment] = []

class ReviewPatch(BaseModel):
    fullName: Optional[str] = Field(default=None, min_length=1, max_length=100)
    review: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    images: Optional[List[Attachment]] = None
