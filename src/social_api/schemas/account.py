"""
Pydantic models for account payloads.

Wire names follow the public API (`accountId`); Python code uses the ORM attribute names.
"""

from pydantic import BaseModel, ConfigDict, Field


class AccountPayload(BaseModel):
    """
    Body of POST /register and POST /login.

    Every field is optional at this layer: missing or blank values are reported by the
    account validators with a message naming the field, not by pydantic.
    """

    model_config = ConfigDict(populate_by_name=True)

    account_id: int | None = Field(None, alias="accountId")
    username: str | None = Field(None, examples=["alice"])
    password: str | None = Field(None, examples=["secret"])


class AccountRead(BaseModel):
    """Schema for reading an account from the API."""

    # from_attributes: build straight from the ORM object
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(serialization_alias="accountId")
    username: str
    password: str


class AccountDeleted(BaseModel):
    message: str
