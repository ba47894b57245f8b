"""
Chat Completion Client

The provider speaks the OpenAI chat-completions API, so we use the openai
library. One POST per call: bearer key, model, system prompt, history.

No retries here: the client is built with max_retries=0 and any failure
propagates to the caller, which decides what to show the user.
"""
from typing import List, Dict

from openai import OpenAI
from portal.core.config import get_settings


class CompletionError(Exception):
    """Provider returned nothing usable."""


class CompletionClient:
    """
    Wrapper for the chat-completions endpoint.
    """

    def __init__(self, api_key: str = None, base_url: str = None, model: str = None):
        settings = get_settings()
        self.client = OpenAI(
            api_key=api_key or settings.completion_api_key or "missing-key",
            base_url=base_url or settings.completion_base_url,
            max_retries=0
        )
        self.model = model or settings.completion_model
        self.max_tokens = settings.completion_max_tokens
        self.temperature = settings.completion_temperature

    def complete(self, system_prompt: str, history: List[Dict[str, str]]) -> str:
        """
        Send system prompt + history, return the single reply text.

        history: [{"role": "user"|"assistant", "content": "..."}] oldest first
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": system_prompt}] + list(history),
            max_tokens=self.max_tokens,
            temperature=self.temperature
        )
        if not response.choices:
            raise CompletionError("Provider returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise CompletionError("Provider returned an empty reply")
        return content


# Singleton instance
_completion_client: CompletionClient = None


def get_completion_client() -> CompletionClient:
    """Get or create completion client (singleton pattern)"""
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient()
    return _completion_client
