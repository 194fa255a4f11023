"""Pydantic models for inbound control messages."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _ControlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class StartTranscriptionRequest(_ControlRequest):
    channel_id: str = Field(..., alias="channelId", min_length=1)
    openai_key: Optional[str] = Field(None, alias="openaiKey")
    filter_political: bool = Field(False, alias="filterPolitical")


class StopTranscriptionRequest(_ControlRequest):
    channel_id: str = Field(..., alias="channelId", min_length=1)


class InitCredentialsRequest(_ControlRequest):
    api_key: Optional[str] = Field(None, alias="apiKey")
