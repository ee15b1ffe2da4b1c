import asyncio
import logging
from typing import Literal

import httpx
from pydantic import BaseModel

from lemerle_api.core.config import settings
from lemerle_api.core.errors import ConfigurationError, UpstreamError, ValidationError
from lemerle_api.core.i18n import translate

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0
PENDING_STATUSES = {"starting", "processing"}


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


def build_system_prompt(history: list[ChatMessage], locale: str) -> str:
    """Localized assistant instructions followed by the earlier turns of the conversation."""
    prompt = translate("chat_system_prompt", locale, site_name=settings.site_name) + "\n\n"
    if history:
        prompt += translate("chat_history_header", locale) + "\n"
        for m in history:
            role = translate("chat_role_user" if m.role == "user" else "chat_role_assistant", locale)
            prompt += f"{role}: {m.content}\n"
        prompt += "\n"
    return prompt


def _join_output(output: object) -> str:
    if isinstance(output, list):
        return "".join(str(part) for part in output)
    if isinstance(output, str):
        return output
    return ""


def _prediction_body(resp: httpx.Response) -> dict:
    """Decode a prediction response; anything but a JSON object is an upstream failure."""
    try:
        body = resp.json()
    except ValueError as e:
        logger.warning("Replicate returned a non-JSON body: status=%s body=%s", resp.status_code, resp.text[:500])
        raise UpstreamError() from e
    if not isinstance(body, dict):
        logger.warning("Replicate returned unexpected JSON: %r", body)
        raise UpstreamError()
    return body


async def _wait_for_prediction(client: httpx.AsyncClient, prediction: dict) -> dict:
    """Poll a prediction that did not finish within the Prefer: wait window."""
    get_url = (prediction.get("urls") or {}).get("get")
    loop = asyncio.get_running_loop()
    deadline = loop.time() + settings.chat_timeout_seconds
    while prediction.get("status") in PENDING_STATUSES:
        if not get_url or loop.time() >= deadline:
            raise UpstreamError()
        await asyncio.sleep(POLL_INTERVAL_SECONDS)
        resp = await client.get(get_url)
        if resp.status_code != 200:
            logger.warning("Replicate poll failed: status=%s body=%s", resp.status_code, resp.text[:500])
            raise UpstreamError()
        prediction = _prediction_body(resp)
    return prediction


async def complete_chat(
    messages: list[ChatMessage],
    locale: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Send the conversation to the hosted model and return its reply text."""
    if not messages:
        raise ValidationError("chat_invalid_messages")
    if not settings.chat_enabled:
        logger.error("Chat requested but REPLICATE_API_TOKEN is not set")
        raise ConfigurationError()

    prompt = messages[-1].content
    system_prompt = build_system_prompt(messages[:-1], locale)
    logger.debug("Chat request: %d message(s), locale=%s", len(messages), locale)

    url = f"{settings.replicate_api_url}/models/{settings.chat_model}/predictions"
    headers = {
        "Authorization": f"Bearer {settings.replicate_api_token}",
        "Content-Type": "application/json",
        "Prefer": "wait",
    }
    payload = {"input": {"prompt": prompt, "system_prompt": system_prompt}}
    try:
        async with httpx.AsyncClient(
            timeout=settings.chat_timeout_seconds, transport=transport, headers=headers
        ) as client:
            resp = await client.post(url, json=payload)
            if resp.status_code not in (200, 201):
                logger.warning(
                    "Replicate prediction failed: status=%s body=%s",
                    resp.status_code,
                    resp.text[:500],
                )
                raise UpstreamError()
            prediction = await _wait_for_prediction(client, _prediction_body(resp))
    except httpx.HTTPError as e:
        logger.exception("Replicate request error: %s", e)
        raise UpstreamError() from e

    if prediction.get("status") != "succeeded":
        logger.warning(
            "Replicate prediction ended with status=%s error=%s",
            prediction.get("status"),
            prediction.get("error"),
        )
        raise UpstreamError()
    return _join_output(prediction.get("output"))
