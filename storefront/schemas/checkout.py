"""Checkout Schemas — response contracts for the checkout endpoint.

Invariants:
    - The request body is NOT modeled here: the service parses it after its
      guards run, so bad bodies never short-circuit the method/config checks
    - ErrorResponse.type/code are present only for payment-provider failures
"""

from pydantic import BaseModel


class CheckoutSessionResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str
    type: str | None = None
    code: str | None = None
