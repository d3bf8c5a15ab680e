"""AI-assisted domain inference through Groq's OpenAI-compatible API."""

from __future__ import annotations

import json
import logging
import os
from typing import List, Optional

import openai
from openai import OpenAI

from ..config import GROQ_API_KEY_ENV, GROQ_MODEL_ENV
from ..errors import MissingCredentialsError
from .settings import ResolverSettings

LOGGER = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
SYSTEM_PROMPT = "You are a helpful domain name inference assistant."

PROMPT_TEMPLATE = """You are a domain name inference expert. Given a business name, generate the most likely domain names.

Business Name: "{name}"

Generate 3-5 possible domain names as a simple JSON array. Consider:
- Shortened versions of the name
- Key descriptive words (e.g., "Centaman Entrance Control" → "entrancecontrol")
- Common domain patterns
- Likely country TLDs (prioritize .com, .com.au, .co.uk)

Return ONLY a JSON array of strings like: ["domain1.com", "domain2.com.au"]
NO explanations, NO markdown, NO code fences."""


def build_prompt(name: str) -> str:
    """Build the inference prompt for a business name.

    Args:
        name (str): Normalized business name.

    Returns:
        str: User prompt.
    """
    return PROMPT_TEMPLATE.format(name=name)


def parse_candidate_domains(text: Optional[str]) -> List[str]:
    """Parse a model reply strictly as a JSON array of strings.

    Args:
        text (Optional[str]): Model reply.

    Returns:
        List[str]: Candidate domains; empty when the reply is not a string array.
    """
    cleaned = (text or "").strip()
    if not (cleaned.startswith("[") and cleaned.endswith("]")):
        LOGGER.info("AI response is not a JSON array, skipping inference")
        return []
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        LOGGER.info("AI response parse failed, skipping inference")
        return []
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        LOGGER.info("AI response holds non-string entries, skipping inference")
        return []
    return data


def is_rate_limit_error(error: BaseException) -> bool:
    """Check whether an error means the AI provider is rate limiting.

    Args:
        error (BaseException): Error raised by the AI collaborator.

    Returns:
        bool: True for rate limit errors.
    """
    if isinstance(error, openai.RateLimitError):
        return True
    message = str(error)
    return "rate_limit" in message or "429" in message


class GroqDomainInference:
    """Suggest candidate domains for a business name with a chat model."""

    def __init__(self, client: object, model: str) -> None:
        """Initialize the inference collaborator.

        Args:
            client (object): OpenAI-compatible client with chat.completions.create.
            model (str): Chat model name.
        """
        self.client = client
        self.model = model

    @classmethod
    def from_env(cls, settings: Optional[ResolverSettings] = None) -> "GroqDomainInference":
        """Build a collaborator from environment variables.

        Args:
            settings (Optional[ResolverSettings]): Model and timeout defaults.

        Returns:
            GroqDomainInference: Configured collaborator.

        Raises:
            MissingCredentialsError: If GROQ_API_KEY is not set.
        """
        settings = settings or ResolverSettings()
        api_key = os.environ.get(GROQ_API_KEY_ENV)
        if not api_key:
            raise MissingCredentialsError(GROQ_API_KEY_ENV)
        client = OpenAI(
            api_key=api_key,
            base_url=GROQ_BASE_URL,
            max_retries=0,
            timeout=settings.http_timeout * 6,
        )
        model = os.environ.get(GROQ_MODEL_ENV) or settings.ai_model
        return cls(client, model)

    def suggest_domains(self, name: str) -> List[str]:
        """Ask the model for candidate domains, without retries.

        Args:
            name (str): Normalized business name.

        Returns:
            List[str]: Candidate domains in model order.

        Raises:
            openai.OpenAIError: Propagated so callers can tell rate limits apart.
        """
        LOGGER.info("Requesting AI domain inference for %s", name)
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(name)},
            ],
            temperature=0.2,
        )
        content = response.choices[0].message.content if response.choices else None
        return parse_candidate_domains(content)
