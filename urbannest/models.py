from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

class Property(BaseModel):
    # DB column image_url <-> JSON imageUrl
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Database-assigned id")
    title: str
    location: str = Field(..., description="Free-form place name")
    price: Decimal = Field(..., description="Exact decimal price")
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Externally hosted image")
