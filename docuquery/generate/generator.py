# GenerationProxy:
# - accepts any model client exposing generate(model, payload)
# - builds the Gemini payload from a GenerationRequest + config.yaml defaults
# - returns GenerationResponse on success, UpstreamFailure for non-OK replies
# Transport errors and unparsable bodies propagate to the HTTP layer.

from __future__ import annotations
import copy
import json
import os
import yaml
from functools import lru_cache
from typing import Any, Dict, Union

from .types import GenerationRequest, GenerationResponse, Message, UpstreamFailure, UpstreamPayload
from .normalizer import normalize
from docuquery.log import get_logger

logger = get_logger("docuquery.generate")

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_GENERATION_CONFIG: Dict[str, Any] = {"temperature": 0.3}
DEFAULT_DOCUMENT_PROMPT = "DOCUMENT:\n\n{extracted_text}"


@lru_cache(maxsize=4)
def load_config(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class GenerationProxy:
    def __init__(self, model_client, config_path: str = DEFAULT_CONFIG_PATH):
        self.model_client = model_client
        self.config_path = config_path
        self.cfg = load_config(config_path)

    @property
    def default_model(self) -> str:
        return self.cfg.get("model") or DEFAULT_MODEL

    def resolve_model(self, req: GenerationRequest) -> str:
        return req.model or self.default_model

    def _compose_system_message(self, req: GenerationRequest) -> Message:
        """Caller's system prompt, else the document itself as the instruction."""
        if req.system_prompt:
            return Message(role="system", content=req.system_prompt)
        template = self.cfg.get("document_prompt", DEFAULT_DOCUMENT_PROMPT)
        return Message(role="system", content=template.format(extracted_text=req.extracted_text or ""))

    def _compose_generation_config(self, req: GenerationRequest) -> Dict[str, Any]:
        # an explicit empty mapping is passed through as-is
        if req.generation_config is not None:
            return req.generation_config
        return copy.deepcopy(self.cfg.get("generation_config") or DEFAULT_GENERATION_CONFIG)

    def build_payload(self, req: GenerationRequest) -> UpstreamPayload:
        return UpstreamPayload(
            contents=[Message(role="user", content=req.user_query or "")],
            system_instruction=self._compose_system_message(req),
            generation_config=self._compose_generation_config(req),
        )

    def generate(self, req: GenerationRequest) -> Union[GenerationResponse, UpstreamFailure]:
        """Main entry point: one upstream call, normalized answer or raw failure."""
        model = self.resolve_model(req)
        payload = self.build_payload(req)

        result = self.model_client.generate(model, payload)
        if not result.ok:
            logger.warning("Upstream returned HTTP %s for model %s", result.status_code, model)
            return UpstreamFailure(
                status_code=result.status_code,
                body=result.body,
                content_type=result.content_type,
            )

        data = json.loads(result.body)
        return GenerationResponse(text=normalize(data), meta={"model": model})
