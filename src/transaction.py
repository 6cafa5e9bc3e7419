#!/usr/bin/env python3
"""
Transaction domain objects built from extracted broker statements.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import re
from datetime import date, time
from decimal import Decimal
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field, field_validator


logger = logging.getLogger(__name__)

ISIN_PATTERN = re.compile(r"[A-Z]{2}[A-Z0-9]{9}[0-9]")


@total_ordering
class Price(BaseModel):
    """Amount in a currency. Prices are ordered by currency first, then by value."""
    model_config = ConfigDict(frozen=True)

    value: Decimal = Field(..., description="Amount")
    currency: str = Field(..., description="ISO 4217 currency code")

    def __lt__(self, other: "Price") -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return (self.currency, self.value) < (other.currency, other.value)

    def __str__(self) -> str:
        return f"{self.value} {self.currency}"


class Transaction(BaseModel):
    """Single purchase or sale of a security"""
    model_config = ConfigDict(frozen=True)

    trade_date: date = Field(..., description="Trade date")
    trade_time: time | None = Field(None, description="Trade time, if reported")
    name: str = Field(..., description="Product name")
    isin: str = Field(..., description="ISIN of the security")
    exchange: str | None = Field(None, description="Securities exchange")
    execution_center: str | None = Field(None, description="Execution venue")
    quantity: Decimal = Field(..., description="Quantity, negative for sales")
    local_price: Price | None = Field(None, description="Price per unit in the trading currency")
    local_value: Price | None = Field(None, description="Value in the trading currency")
    value: Price | None = Field(None, description="Value in the account currency")
    exchange_rate: Decimal | None = Field(None, ge=0, description="Trading to account currency rate")
    commission: Price | None = Field(None, description="Transaction costs")
    total: Price = Field(..., description="Total in the account currency")
    order_id: str | None = Field(None, description="Broker order id")

    @field_validator("isin")
    @classmethod
    def validate_isin(cls, v: str) -> str:
        """Validate ISIN structure (country code, 9 characters, check digit)"""
        v = v.strip().upper()
        if not ISIN_PATTERN.fullmatch(v):
            raise ValueError(f"isin must be a 12 character ISIN, got: {v}")
        return v

    @property
    def is_purchase(self) -> bool:
        return self.quantity > 0
