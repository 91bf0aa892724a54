"""Chat assistant for senior health questions.

Replies come from a chat-completion provider when one is reachable. When the
provider fails for any reason, a fixed keyword table answers instead, so the
user always gets a reply.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from carecompanion.core.config import settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a helpful health assistant for elderly care. Provide concise, "
    "accurate information about health, medications, wellness, and elderly care. "
    "Keep responses friendly, clear, and focused on health topics. Avoid giving "
    "specific medical advice that should come from a doctor. If asked about "
    "emergencies, always recommend contacting emergency services or a healthcare "
    "provider."
)

# Checked in order; the first keyword found in the message wins
FALLBACK_RESPONSES: dict[str, str] = {
    "medication": (
        "It's essential to take your medications as prescribed. If you're "
        "experiencing side effects, please consult with your doctor before "
        "making any changes."
    ),
    "pain": (
        "For minor pain, you might try a warm compress or gentle stretching. "
        "If pain persists, please consult with your healthcare provider."
    ),
    "sleep": (
        "Establishing a regular sleep schedule can help improve sleep quality. "
        "Try avoiding screens before bedtime and create a comfortable sleep "
        "environment."
    ),
    "hello": "Hello! How are you feeling today? Is there something specific I can help you with?",
    "hi": "Hi there! How can I assist you with your health needs today?",
    "appointment": (
        "I can help you schedule an appointment with your doctor. Would you "
        "like me to do that for you?"
    ),
    "medicine": (
        "Regular medication intake is crucial for managing chronic conditions. "
        "Is there a specific medication you'd like to know more about?"
    ),
    "exercise": (
        "Regular exercise is beneficial for seniors. Even light activities like "
        "walking or gentle stretching can improve mobility and overall health."
    ),
    "diet": (
        "A balanced diet rich in fruits, vegetables, and whole grains is "
        "essential for maintaining good health in older adults."
    ),
    "memory": (
        "Memory exercises and staying mentally active can help maintain "
        "cognitive function. Activities like puzzles, reading, or learning new "
        "skills are great options."
    ),
}

DEFAULT_FALLBACK_RESPONSE = (
    "I'm here to help with health-related questions. Could you provide more "
    "details about what you'd like to know?"
)


def fallback_reply(message: str) -> str:
    """Answer from the keyword table by substring match."""
    lowered = message.lower()
    for keyword, response in FALLBACK_RESPONSES.items():
        if keyword in lowered:
            return response
    return DEFAULT_FALLBACK_RESPONSE


class ChatProviderError(Exception):
    """Raised when the chat provider cannot produce a reply."""

    pass


class ChatProvider(ABC):
    """Abstract base class for chat-completion providers."""

    @abstractmethod
    async def complete(self, message: str) -> str:
        """Return the provider's reply to a user message.

        Raises ChatProviderError on failure.
        """
        pass


@dataclass
class ChatConfig:
    """Configuration for the chat-completion API."""

    api_key: str
    api_endpoint: str
    model: str
    max_tokens: int = 300
    temperature: float = 0.7
    timeout_seconds: float = 15.0

    @classmethod
    def from_settings(cls) -> "ChatConfig":
        return cls(
            api_key=settings.chat_api_key,
            api_endpoint=settings.chat_api_endpoint,
            model=settings.chat_model,
            max_tokens=settings.chat_max_tokens,
            temperature=settings.chat_temperature,
            timeout_seconds=settings.chat_timeout_seconds,
        )


class OpenAIChatProvider(ChatProvider):
    """Provider for OpenAI-compatible chat-completion endpoints."""

    def __init__(self, config: ChatConfig | None = None) -> None:
        self.config = config or ChatConfig.from_settings()

    async def complete(self, message: str) -> str:
        if not self.config.api_key:
            raise ChatProviderError("Chat API key is not configured")

        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        headers = {"Authorization": f"Bearer {self.config.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.post(
                    self.config.api_endpoint, json=payload, headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise ChatProviderError(f"Chat API request failed: {e}") from e
        except ValueError as e:
            raise ChatProviderError(f"Chat API returned invalid JSON: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ChatProviderError(f"Unexpected chat API response shape: {e}") from e

        if not content or not content.strip():
            raise ChatProviderError("Chat API returned an empty reply")
        return content.strip()


@dataclass
class ChatReply:
    """Reply text and where it came from ("model" or "fallback")."""

    response: str
    source: str


class AssistantService:
    """Answers chat messages, degrading to keyword replies."""

    def __init__(self, provider: ChatProvider | None = None) -> None:
        self.provider = provider or OpenAIChatProvider()

    async def reply(self, message: str) -> ChatReply:
        """Reply to a user message.

        Raises:
            ValueError: If the message is empty
        """
        if not message or not message.strip():
            raise ValueError("Message is required")

        try:
            text = await self.provider.complete(message)
            return ChatReply(response=text, source="model")
        except ChatProviderError as e:
            logger.warning(f"Chat provider unavailable, using fallback: {e}")
            return ChatReply(response=fallback_reply(message), source="fallback")
