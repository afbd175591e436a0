# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import GenerationProxy
from .normalizer import normalize, extract_text, NO_READABLE_TEXT, SENTINEL_TEXT
from .types import GenerationRequest, GenerationResponse, UpstreamFailure, UpstreamPayload, Message
from .clients.gemini_client import GeminiClient

__all__ = [
    "GenerationProxy",
    "normalize",
    "extract_text",
    "NO_READABLE_TEXT",
    "SENTINEL_TEXT",
    "GenerationRequest",
    "GenerationResponse",
    "UpstreamFailure",
    "UpstreamPayload",
    "Message",
    "GeminiClient",
]
