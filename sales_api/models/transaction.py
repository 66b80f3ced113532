"""Transaction data models."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sales_api.utils.timestamp import parse_timestamp


class Transaction(BaseModel):
    """Transaction model, one product sale/listing event."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Fjallraven  - Foldsack No. 1 Backpack, Fits 15 Laptops",
                "price": 329.85,
                "description": "Your perfect pack for everyday use and walks in the forest.",
                "category": "men's clothing",
                "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
                "sold": False,
                "dateOfSale": "2021-11-27T20:29:54+05:30",
            }
        },
    )

    id: Optional[int] = None
    title: str = Field(..., description="Product title")
    description: str = Field(default="", description="Free-form product description")
    price: float = Field(..., ge=0.0, description="Sale price")
    category: str = Field(..., description="Product category")
    image: Optional[str] = Field(None, description="Product image URL")
    sold: bool = Field(default=False, description="Whether the item was sold")
    date_of_sale: datetime = Field(..., alias="dateOfSale", description="Date and time of sale")

    @field_validator("date_of_sale", mode="before")
    @classmethod
    def _parse_date_of_sale(cls, value):
        if isinstance(value, str):
            return parse_timestamp(value)
        return value
