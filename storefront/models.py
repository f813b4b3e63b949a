# storefront/models.py
from decimal import Decimal
from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

ALL_CATEGORIES = "all"


def _price_to_json(value: Decimal) -> Union[int, float]:
    # stored as a plain JSON number, the same layout the browser widget wrote
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Price = Annotated[Decimal, Field(ge=0), PlainSerializer(_price_to_json, when_used="json")]


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    price: Price
    category: str
    img: str = ""


class CartLine(BaseModel):
    id: int
    title: str
    price: Price
    category: str
    img: str = ""
    quantity: int = Field(default=1, ge=1)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartLine":
        # copied by value; later catalog changes don't reach existing lines
        return cls(**product.model_dump(), quantity=quantity)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class FilterCriteria(BaseModel):
    category: str = ALL_CATEGORIES
    search: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, v: Optional[str]) -> str:
        return v or ALL_CATEGORIES

    @field_validator("search", mode="before")
    @classmethod
    def _strip_search(cls, v: Optional[str]) -> str:
        return (v or "").strip()
