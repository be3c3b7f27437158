"""Shared schema building blocks."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Currency amounts stay Decimal internally but go over the wire as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
