"""Pydantic schemas for webhook payloads and responses."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InstallRequest(BaseModel):
    """Payload posted to the installable callback."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    oauth_id: str = Field(alias="oauthId", min_length=1)
    oauth_secret: str = Field(alias="oauthSecret", min_length=1)
    room_id: str = Field(alias="roomId")

    @field_validator("room_id", mode="before")
    @classmethod
    def coerce_room_id(cls, v: object) -> str:
        """HipChat sends numeric room ids; keep them as strings."""
        if isinstance(v, bool):
            raise ValueError("roomId must be a number or string")
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, (int, str)):
            return str(v)
        raise ValueError(f"roomId must be a number or string, got {type(v).__name__}")


class HookMessage(BaseModel):
    """Inner chat message of a webhook event."""

    model_config = ConfigDict(extra="ignore")

    message: str


class HookItem(BaseModel):
    """Item wrapper of a webhook event."""

    model_config = ConfigDict(extra="ignore")

    message: HookMessage


class HookRequest(BaseModel):
    """Payload posted to the room message webhook."""

    model_config = ConfigDict(extra="ignore")

    oauth_client_id: str
    item: HookItem

    @property
    def text(self) -> str:
        return self.item.message.message


class ReplyResponse(BaseModel):
    """Reply returned from the webhook."""

    message: str
    color: str
