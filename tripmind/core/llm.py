"""Chat model factory for the generation and refinement source."""
from __future__ import annotations

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_xai import ChatXAI

from tripmind.core.config import ApiSettings


def create_chat_model(settings: ApiSettings, *, temperature: float = 0.7) -> BaseChatModel:
    """Instantiate the chat model used to author trips."""

    return ChatXAI(
        model=settings.llm_model,
        temperature=temperature,
        api_key=settings.ensure("xai_api_key"),
        timeout=settings.http_timeout_s * 6,
    )
