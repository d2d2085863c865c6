"""Order schemas for the admin order list."""

from enum import Enum

from pydantic import BaseModel


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
