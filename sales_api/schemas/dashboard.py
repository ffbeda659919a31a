"""Dashboard schemas module.

Defines response schemas for the monthly statistics, category pie chart,
price-range bar chart and combined dashboard endpoints.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Statistics Component ---

class StatisticsResponse(BaseModel):
    """Sales totals for a single month."""

    total_sale_amount: float = Field(
        ...,
        alias="totalSaleAmount",
        description="Sum of price over sold items",
    )
    total_sold_items: int = Field(
        ...,
        alias="totalSoldItems",
        description="Number of sold items",
    )
    total_not_sold_items: int = Field(
        ...,
        alias="totalNotSoldItems",
        description="Number of unsold items",
    )

    model_config = ConfigDict(populate_by_name=True)


# --- Pie Chart Component ---

class CategoryCount(BaseModel):
    """Number of items in one category."""

    category: Optional[str] = Field(None, description="Product category")
    item_count: int = Field(..., alias="itemCount", description="Items in category")

    model_config = ConfigDict(populate_by_name=True)


# --- Bar Chart Component ---

class PriceRangeCount(BaseModel):
    """Number of items in one price band."""

    price_range: str = Field(..., alias="priceRange", description="Price band label")
    item_count: int = Field(..., alias="itemCount", description="Items in band")

    model_config = ConfigDict(populate_by_name=True)


# --- Combined Dashboard ---

class CombinedDataResponse(BaseModel):
    """All three dashboard reports for the same month."""

    statistics: StatisticsResponse
    bar_chart: list[PriceRangeCount] = Field(default_factory=list, alias="barChart")
    pie_chart: list[CategoryCount] = Field(default_factory=list, alias="pieChart")

    model_config = ConfigDict(populate_by_name=True)
