"""
triage/nodes/inference.py

Node 1: Inference.
Sends the symptom prompt to the hosted text-generation model.
Any failure (timeout, HTTP error, unexpected payload) yields generated_text=None
so the graph routes to the rule-based fallback.
"""

from typing import Optional

import httpx
import structlog

from config import settings
from triage.state import TriageState

logger = structlog.get_logger(__name__)

PROMPT_TEMPLATE: str = (
    "Medical analysis: Symptoms: {symptoms}. Provide possible conditions and recommendations."
)


def build_prompt(symptoms: str) -> str:
    return PROMPT_TEMPLATE.format(symptoms=symptoms.strip())


def extract_generated_text(payload: object) -> Optional[str]:
    """Accept both `[{"generated_text": ...}]` and `{"generated_text": ...}`."""
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        text = payload[0].get("generated_text")
    elif isinstance(payload, dict):
        text = payload.get("generated_text")
    else:
        text = None

    if isinstance(text, str) and text.strip():
        return text
    return None


async def call_inference_service(symptoms: str) -> Optional[str]:
    """POST the prompt to the inference endpoint; None on any failure."""
    url = settings.triage_inference_url
    headers = {"Content-Type": "application/json"}
    if settings.triage_inference_token:
        headers["Authorization"] = f"Bearer {settings.triage_inference_token}"

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_sec) as client:
            response = await client.post(
                url,
                json={"inputs": build_prompt(symptoms)},
                headers=headers,
            )
            response.raise_for_status()
            payload = response.json()
    except httpx.TimeoutException:
        logger.warning("inference_timeout", url=url)
        return None
    except httpx.HTTPStatusError as exc:
        logger.error("inference_http_error", url=url, status=exc.response.status_code)
        return None
    except Exception as exc:
        logger.error("inference_unexpected_error", url=url, error=str(exc))
        return None

    text = extract_generated_text(payload)
    if text is None:
        logger.warning("inference_unexpected_shape", url=url)
    return text


async def inference_node(state: TriageState) -> dict:
    generated_text = await call_inference_service(state["symptoms"])
    logger.info("inference_complete", remote_available=generated_text is not None)
    return {"generated_text": generated_text}
