import logging

from openai import AsyncAzureOpenAI

from askdata.config import settings
from askdata.errors import ModelServiceError

log = logging.getLogger(__name__)

_client: AsyncAzureOpenAI | None = None

# Deployment families that take max_completion_tokens and fix the temperature.
_REASONING_FAMILIES = ("gpt-5", "o1", "o3", "o4")


def is_configured() -> bool:
    return settings.azure_openai.is_configured


def get_client() -> AsyncAzureOpenAI:
    global _client
    if _client is None:
        cfg = settings.azure_openai
        if not cfg.is_configured:
            raise ModelServiceError(
                "Azure OpenAI is not configured "
                "(set ASKDATA_AZURE_OPENAI__ENDPOINT and ASKDATA_AZURE_OPENAI__API_KEY)"
            )
        log.info("Creating Azure OpenAI client for %s", cfg.endpoint)
        _client = AsyncAzureOpenAI(
            azure_endpoint=cfg.endpoint,
            api_key=cfg.api_key,
            api_version=cfg.api_version,
        )
    return _client


def generation_params(deployment: str, max_tokens: int) -> dict:
    """Token limit and temperature arguments accepted by ``deployment``."""
    name = deployment.lower()
    if any(name == f or name.startswith((f + "-", f + ".")) for f in _REASONING_FAMILIES):
        return {"max_completion_tokens": max_tokens}
    return {"max_tokens": max_tokens, "temperature": 0.0}


async def _complete(deployment: str, messages: list[dict], max_tokens: int):
    resp = await get_client().chat.completions.create(
        model=deployment,
        messages=messages,
        **generation_params(deployment, max_tokens),
    )
    return resp.choices[0]


async def chat(system_prompt: str, user_message: str) -> tuple[str, str]:
    """Ask the query deployment. Returns (text, finish_reason)."""
    cfg = settings.azure_openai
    choice = await _complete(
        cfg.deployment,
        [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        cfg.max_tokens,
    )
    return choice.message.content or "", choice.finish_reason or "stop"


async def quick_chat(user_message: str) -> str:
    """Single-turn call on the summary deployment; stripped text."""
    cfg = settings.azure_openai
    choice = await _complete(
        cfg.summary_deployment,
        [{"role": "user", "content": user_message}],
        cfg.summary_max_tokens,
    )
    return (choice.message.content or "").strip()
