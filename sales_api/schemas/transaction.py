"""Transaction schemas module."""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TransactionResponse(BaseModel):
    """Schema for a stored transaction row.

    Field names follow the upstream dataset, so ``date_of_sale`` is
    serialized as ``dateOfSale``.
    """

    id: int = Field(..., description="Transaction ID")
    title: Optional[str] = Field(None, description="Product title")
    price: Optional[Union[float, str]] = Field(None, description="Sale price (text if the source sent text)")
    description: Optional[str] = Field(None, description="Product description")
    category: Optional[str] = Field(None, description="Product category")
    image: Optional[str] = Field(None, description="Product image URL")
    sold: Optional[Union[int, float, str]] = Field(
        None, description="1 if the item was sold, else 0 (other values kept as received)"
    )
    date_of_sale: Optional[str] = Field(
        None,
        alias="dateOfSale",
        description="Date of sale as provided by the source (ISO 8601)",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
