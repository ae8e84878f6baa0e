from pydantic import BaseModel, Field


class SalesTrendsRequest(BaseModel):
    """Two CSV blobs, headers included."""
    sales_data: str = Field(..., min_length=1, description="CSV: Medicine Name, Manufacturer, Quantity Sold, Date")
    prescription_trends: str = Field(..., min_length=1, description="CSV: Medicine Name, Doctor Specialty, Frequency, Date")


class SalesTrendsResponse(BaseModel):
    highest_demand_medicines: str
    future_stock_predictions: str
    stock_optimization_suggestions: str


class SampleDataResponse(BaseModel):
    sales_data: str
    prescription_trends: str
