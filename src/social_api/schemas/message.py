"""
Pydantic models for message payloads.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class MessagePayload(BaseModel):
    """
    Body of POST /messages and PATCH /messages/{id}.

    Accepts the long wire names (`messageText`, `timePostedEpoch`) and the short ones
    (`text`, `timePosted`). Text rules (blank, max length) live in the validators.
    """

    model_config = ConfigDict(populate_by_name=True)

    message_id: int | None = Field(None, alias="messageId")
    posted_by: int | None = Field(None, validation_alias=AliasChoices("postedBy", "posted_by"))
    text: str | None = Field(None, validation_alias=AliasChoices("messageText", "text"))
    time_posted: int | None = Field(
        None, validation_alias=AliasChoices("timePostedEpoch", "timePosted", "time_posted")
    )


class MessageRead(BaseModel):
    """Schema for reading a message from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(serialization_alias="messageId")
    posted_by: int = Field(serialization_alias="postedBy")
    text: str = Field(serialization_alias="messageText")
    time_posted: int | None = Field(None, serialization_alias="timePostedEpoch")
