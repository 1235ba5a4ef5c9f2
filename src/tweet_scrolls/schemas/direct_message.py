"""Direct-message archive record schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tweet_scrolls.schemas.flexible import FlexibleStr


class DmMessageCreate(BaseModel):
    """Creation payload of one direct message."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: FlexibleStr = None
    text: FlexibleStr = None
    created_at: FlexibleStr = Field(default=None, alias="createdAt")
    sender_id: FlexibleStr = Field(default=None, alias="senderId")
    recipient_id: FlexibleStr = Field(default=None, alias="recipientId")
    media_urls: list[FlexibleStr] = Field(default_factory=list, alias="mediaUrls")
    reactions: list[Any] = Field(default_factory=list)
    urls: list[Any] = Field(default_factory=list)


class DmMessage(BaseModel):
    """Message entry; non-message events carry no ``messageCreate``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_create: DmMessageCreate | None = Field(default=None, alias="messageCreate")

    @field_validator("message_create", mode="before")
    @classmethod
    def _drop_non_object(cls, value: object) -> object:
        return value if isinstance(value, dict) else None


class DmConversation(BaseModel):
    """A DM conversation between two accounts."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    conversation_id: FlexibleStr = Field(default="", alias="conversationId")
    messages: list[DmMessage] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def _messages_as_objects(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return [item if isinstance(item, dict) else {} for item in value]

    @property
    def participants(self) -> list[str]:
        """Participant ids encoded in the ``"<idA>-<idB>"`` conversation id.

        Returns an empty list when the id does not have exactly two parts.
        """
        parts = (self.conversation_id or "").split("-")
        if len(parts) != 2 or not all(parts):
            return []
        return parts


class DmWrapper(BaseModel):
    """Array element wrapping a conversation under ``dmConversation``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    dm_conversation: DmConversation = Field(alias="dmConversation")


# Archive paths decoded as scalars by DmConversation
DM_SCALAR_PATHS = frozenset(
    {
        "dmConversation.conversationId",
        "dmConversation.messages[].messageCreate.id",
        "dmConversation.messages[].messageCreate.text",
        "dmConversation.messages[].messageCreate.createdAt",
        "dmConversation.messages[].messageCreate.senderId",
        "dmConversation.messages[].messageCreate.recipientId",
        "dmConversation.messages[].messageCreate.mediaUrls[]",
    }
)
