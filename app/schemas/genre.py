from pydantic import BaseModel, Field
from typing import Optional

class GenreBase(BaseModel):
    name: str

class GenreCreate(BaseModel):
    # Left optional so a missing name is reported as "empty" by GenreService
    name: Optional[str] = None

class GenreUpdate(GenreCreate):
    pass

class Genre(GenreBase):
    id: int = Field(gt=0)

    class Config:
        from_attributes = True
