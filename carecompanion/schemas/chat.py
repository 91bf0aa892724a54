"""Pydantic schemas for the chat assistant."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """A user message to the assistant."""

    message: str = Field("", max_length=4000)


class ChatResponse(BaseModel):
    """The assistant's reply."""

    response: str
