from __future__ import annotations
from typing import Any, Dict, Optional
import json
import logging
from openai import OpenAI
import resume_tailor.config as cfg
from resume_tailor.services.errors import ParseError
from resume_tailor.services.resume_schema import response_format

logger = logging.getLogger(__name__)

_client: Optional[OpenAI] = None


def get_openai_client() -> OpenAI:
    global _client
    if _client is None:
        if not cfg.OPENAI_API_KEY:
            raise RuntimeError(f"OpenAI key missing. Set {cfg.API_KEY_SETTING} in .env or on the setup page")
        _client = OpenAI(
            api_key=cfg.OPENAI_API_KEY,
            timeout=cfg.REQUEST_TIMEOUT_SECONDS,
            max_retries=cfg.MAX_RETRIES,
        )
    return _client


def reset_openai_client() -> None:
    global _client
    _client = None


def generate_structured(stage: str, system_prompt: str, user_prompt: str, temperature: float) -> Dict[str, Any]:
    """Issue one schema-guided request and return the decoded JSON object.

    Raises ParseError when the backend answers with empty text or text that is
    not a JSON object. SDK errors (network, auth, rate limits) propagate as-is.
    """
    client = get_openai_client()
    resp = client.chat.completions.create(
        model=cfg.MODEL,
        response_format=response_format(),
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        temperature=temperature,
    )
    content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
    if not content:
        logger.error("%s: empty response from model", stage)
        raise ParseError(f"{stage.capitalize()} failed: the AI service returned an empty response.")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error("%s: invalid JSON returned by model. snip=%s", stage, content[:1000])
        raise ParseError(f"{stage.capitalize()} failed: the AI service returned malformed JSON.") from e
    if not isinstance(data, dict):
        logger.error("%s: expected a JSON object, got %s", stage, type(data).__name__)
        raise ParseError(f"{stage.capitalize()} failed: the AI service returned malformed JSON.")
    return data
