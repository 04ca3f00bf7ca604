"""Tax pipeline models exchanged with the host platform."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class TaxLocation(BaseModel):
    """Location tuple supplied by the host at tax-calculation time."""

    country: str = ""
    state: str = ""
    postcode: str = ""
    city: str = ""
    tax_class: str = ""


class TaxRateRecord(BaseModel):
    """A single tax rate as the host's tax engine consumes it."""

    id: str
    rate: float
    label: str = "Sales Tax"
    shipping: Literal["yes", "no"] = "yes"
    compound: Literal["yes", "no"] = "no"
