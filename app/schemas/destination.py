from pydantic import BaseModel, Field
from typing import List, Optional

class DestinationIn(BaseModel):
    city: str = Field(min_length=1, max_length=120)
    country: str = Field(min_length=1, max_length=120)

class DestinationPatch(BaseModel):
    city: Optional[str] = Field(default=None, min_length=1, max_length=120)
    country: Optional[str] = Field(default=None, min_length=1, max_length=120)

class DestinationBulkIn(BaseModel):
    destinations: List[DestinationIn] = Field(min_length=1)

class DestinationIdsIn(BaseModel):
    ids: List[str] = Field(min_length=1)
