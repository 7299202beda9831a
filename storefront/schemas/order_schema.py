from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PaymentMethod(str, Enum):
    CASH_ON_DELIVERY = "cash_on_delivery"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"


class PlaceOrderIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    cart_id: str = Field(..., alias="cartId")


class OrderCreatedOut(BaseModel):
    id: str
