# Typed dataclasses shared by the proxy core and the upstream client.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


@dataclass
class Message:
    """Single chat turn: system, user, or model."""
    role: str
    content: str

    def to_content(self) -> Dict[str, Any]:
        return {"role": self.role, "parts": [{"text": self.content}]}


@dataclass
class GenerationRequest:
    """What the browser (or QueryClient) posts to /api/generate."""
    user_query: str = ""
    system_prompt: Optional[str] = None
    extracted_text: Optional[str] = None
    model: Optional[str] = None
    generation_config: Optional[Dict[str, Any]] = None


@dataclass
class UpstreamPayload:
    """Request body for Gemini generateContent."""
    contents: List[Message]
    system_instruction: Message
    generation_config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contents": [m.to_content() for m in self.contents],
            "systemInstruction": self.system_instruction.to_content(),
            "generationConfig": self.generation_config,
        }


@dataclass
class UpstreamResult:
    """Raw outcome of a single upstream HTTP call."""
    status_code: int
    body: str
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class GenerationResponse:
    """Final answer of the proxy on the success path."""
    text: str
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UpstreamFailure:
    """Non-OK upstream reply, forwarded to the caller untouched."""
    status_code: int
    body: str
    content_type: Optional[str] = None
