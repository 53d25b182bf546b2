from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..common.validators import require_non_empty
from ..core.constants import ASSISTANT_FALLBACK_REPLY
from ..state.store import StateStore

logger = logging.getLogger(__name__)


class Assistant(Protocol):
    def reply(self, context: dict, prompt: str) -> str:
        raise NotImplementedError


class AssistantService:
    """Pass the read-only snapshot and a question to the assistant collaborator."""

    def __init__(self, store: StateStore, assistant: Optional[Assistant] = None):
        self._store = store
        self._assistant = assistant

    def context(self) -> dict:
        return self._store.snapshot.to_dict()

    def ask(self, prompt: str) -> str:
        prompt = require_non_empty(prompt, "Question")
        if self._assistant is None:
            return ASSISTANT_FALLBACK_REPLY
        try:
            return self._assistant.reply(self.context(), prompt) or ASSISTANT_FALLBACK_REPLY
        except Exception:
            logger.exception("Assistant collaborator failed")
            return ASSISTANT_FALLBACK_REPLY
