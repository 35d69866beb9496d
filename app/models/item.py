from sqlmodel import SQLModel, Field ,Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime


if TYPE_CHECKING:
    from .category import Category

class Item(SQLModel, table=True):
    #main info
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: str

    #Shop Details
    price: float = 0.0   # 0 means free

    #Storage references
    image_url: Optional[str] = None
    file_url: str

    #Engagement
    downloads: int = 0
    rating: float = 0.0
    ratings_count: int = 0

    created_by: Optional[int] = Field(default=None, foreign_key="profile.id")

    #timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    #category
    category_id: Optional[int] = Field(default=None, foreign_key="category.id")
    category: Optional["Category"] = Relationship(back_populates="items")

    @property
    def is_free(self) -> bool:
        return self.price == 0
