from typing import Optional

from pydantic import BaseModel, Field

# Request models describe shape only; range and membership rules live in
# services.validation so they run the same way for every caller.


class SweetCreate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, allow_inf_nan=False)
    quantity: Optional[int] = None


class SweetUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, allow_inf_nan=False)
    quantity: Optional[int] = None


class PurchaseRequest(BaseModel):
    quantity: Optional[int] = None


class RestockRequest(BaseModel):
    quantity: Optional[int] = None
