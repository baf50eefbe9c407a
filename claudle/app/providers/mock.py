"""Mock provider that answers without calling the network.

Enable by setting environment variable:
    MOCK_PROVIDER=true
"""

import random
from typing import Any, Dict, List, Optional

from claudle.app.providers.base import BaseProvider

MOCK_WORDS = ["CRANE", "SLATE", "PLANT", "GHOST", "BRICK", "FLAME", "OCEAN", "TIGER"]


class MockProvider(BaseProvider):
    """Returns canned replies in the Messages API response shape.

    ``replies`` are returned in order, one per call, and then the default
    behaviour resumes: a random word for word-generation prompts,
    otherwise ``default_reply``. ``requests`` records every payload sent.
    """

    def __init__(
        self,
        replies: Optional[List[str]] = None,
        default_reply: str = "Trust your gut. Every guess teaches you something.",
        rng: Optional[random.Random] = None,
    ):
        super().__init__("http://mock.provider", "mock-key", "mock-model")
        self._replies = list(replies or [])
        self.default_reply = default_reply
        self.requests: List[Dict[str, Any]] = []
        self._rng = rng or random.Random()

    def _reply_for(self, prompt: str) -> str:
        if self._replies:
            return self._replies.pop(0)
        if "5-letter word" in prompt:
            return self._rng.choice(MOCK_WORDS)
        return self.default_reply

    async def create_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.requests.append(payload)
        prompt = payload["messages"][-1]["content"]
        return {
            "id": f"msg_mock_{len(self.requests)}",
            "type": "message",
            "role": "assistant",
            "model": self.model,
            "content": [{"type": "text", "text": self._reply_for(prompt)}],
            "stop_reason": "end_turn",
        }

    async def health_check(self, timeout: float = 2.0) -> bool:
        return True
