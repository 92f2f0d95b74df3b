"""Painting descriptions from the OpenAI chat completions API."""

import logging

import openai
from openai import OpenAI

from painting_narrator.constants import DESCRIPTION_MODEL, DESCRIPTION_TIMEOUT, PROMPT_TEMPLATE
from painting_narrator.errors import DescriptionServiceError
from painting_narrator.models import NarrationRequest, PaintingRecord

logger = logging.getLogger(__name__)


def build_prompt(title: str, painter_name: str) -> str:
    return PROMPT_TEMPLATE.format(title=title, painter=painter_name)


def build_request(painting: PaintingRecord) -> NarrationRequest:
    return NarrationRequest(painting=painting, prompt=build_prompt(painting.title, painting.painter_name))


def _error_payload(error: Exception):
    """Upstream error body if the service answered, else the error message."""
    body = getattr(error, "body", None)
    if body:
        return body
    return str(error)


class DescriptionClient:
    """Single-shot description requests. Failures surface immediately, no retries."""

    def __init__(
        self,
        api_key: str,
        model: str = DESCRIPTION_MODEL,
        timeout: float = DESCRIPTION_TIMEOUT,
        client: OpenAI | None = None,
    ):
        self.model = model
        self.client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def complete(self, prompt: str) -> str:
        """Send one user-role prompt and return the stripped completion text."""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            payload = _error_payload(e)
            logger.debug("Description request failed: %s", payload)
            raise DescriptionServiceError("Failed to generate description", payload=payload) from e

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""
        content = content.strip()
        if not content:
            raise DescriptionServiceError("Description service returned an empty completion")
        return content

    def fetch_description(self, title: str, painter_name: str) -> str:
        return self.complete(build_prompt(title, painter_name))
