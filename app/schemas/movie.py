from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import date

class MovieForm(BaseModel):
    """Raw values as submitted by the movie form; validated by MovieService"""
    title: Optional[str] = None
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    popularity: Any = None
    genre_ids: List[int] = Field(default_factory=list, alias="genreIds")

    class Config:
        populate_by_name = True

class Movie(BaseModel):
    id: int = Field(gt=0)
    title: str
    release_date: date = Field(alias="releaseDate")
    popularity: int
    genre_ids: List[int] = Field(alias="genreIds")
    rating_sum: int = Field(default=0, ge=0, alias="ratingSum")
    rating_count: int = Field(default=0, ge=0, alias="ratingCount")

    class Config:
        populate_by_name = True
        from_attributes = True

    @property
    def mean_rating(self) -> float:
        """Average vote, 0 when nobody has voted yet"""
        if self.rating_count == 0:
            return 0.0
        return self.rating_sum / self.rating_count

    def vote(self, value: int) -> None:
        self.rating_sum += value
        self.rating_count += 1

class VoteIn(BaseModel):
    value: Any = None
