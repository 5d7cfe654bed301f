import os
import re
import json
import logging
from typing import Dict, Optional, Any

# LangChain Imports
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, SystemMessage

# Langfuse SDK - @observe decorator for LLM tracing
from langfuse import observe, get_client

# Configuration
from config import LLM_PROVIDER, LLM_API_KEY, LLM_MODEL as OVERRIDE_MODEL, OLLAMA_URL, LLM_TIMEOUT_SECONDS
from mealprep.exceptions import GenerationError

logger = logging.getLogger(__name__)

LANGFUSE_ENABLED = bool(os.getenv("LANGFUSE_PUBLIC_KEY") and os.getenv("LANGFUSE_SECRET_KEY"))
langfuse_client = get_client() if LANGFUSE_ENABLED else None

# Determine Model Name based on Provider
# If LLM_MODEL is set in env, it overrides everything.
DEFAULT_MODELS = {
    "ollama": "gpt-oss:120b-cloud",
    "openrouter": "google/gemini-2.0-flash-001", # Cost effective default
    "openai": "gpt-4o",
}

MODEL_NAME = OVERRIDE_MODEL if OVERRIDE_MODEL else DEFAULT_MODELS.get(LLM_PROVIDER, "gpt-4o-mini")

# Base URLs for paid providers
PROVIDER_URLS = {
    "openrouter": "https://openrouter.ai/api/v1",
    "openai": None # Uses default OpenAI URL
}


def get_llm(temperature: float = 0.7, max_tokens: int = 2000, json_mode: bool = False):
    """
    Factory function to get a configured LangChain Chat Model instance.
    Supports: Ollama (Local), OpenRouter, OpenAI
    """

    # 1. Ollama (Local)
    if LLM_PROVIDER == "ollama":
        format_val = "json" if json_mode else ""
        return ChatOllama(
            base_url=OLLAMA_URL,
            model=MODEL_NAME,
            temperature=temperature,
            num_predict=max_tokens,
            format=format_val,
            client_kwargs={"timeout": LLM_TIMEOUT_SECONDS}
        )

    # 2. OpenAI Compatible (OpenRouter, OpenAI)
    elif LLM_PROVIDER in ["openrouter", "openai"]:
        if not LLM_API_KEY:
            # Let the call fail so the misconfiguration is visible
            logger.critical(f"[LLM Service] Missing API Key for provider {LLM_PROVIDER}")

        model_kwargs = {}
        if json_mode:
            model_kwargs["response_format"] = {"type": "json_object"}

        return ChatOpenAI(
            model=MODEL_NAME,
            api_key=LLM_API_KEY,
            base_url=PROVIDER_URLS.get(LLM_PROVIDER),
            temperature=temperature,
            max_tokens=max_tokens,
            model_kwargs=model_kwargs,
            timeout=LLM_TIMEOUT_SECONDS,
            max_retries=0
        )

    # 3. Fallback / Unknown
    else:
        logger.warning(f"[LLM Service] Unknown provider '{LLM_PROVIDER}'. Defaulting to Ollama.")
        return ChatOllama(
            base_url=OLLAMA_URL,
            model=MODEL_NAME,
            temperature=temperature,
            num_predict=max_tokens,
            format="json" if json_mode else "",
            client_kwargs={"timeout": LLM_TIMEOUT_SECONDS}
        )


def _log_usage(response, temperature: float, max_tokens: int):
    """Logs token usage and forwards it to Langfuse when tracing is configured."""
    metadata = getattr(response, "response_metadata", None)
    if not metadata:
        return

    # Ollama returns tokens directly in metadata, not in nested 'usage'
    # Keys: prompt_eval_count (input), eval_count (output)
    input_tokens = metadata.get('prompt_eval_count') or 0
    output_tokens = metadata.get('eval_count') or 0

    # Fallback to nested usage dict (for OpenAI-compatible providers)
    if input_tokens == 0 and output_tokens == 0:
        usage = metadata.get('token_usage') or metadata.get('usage') or {}
        input_tokens = usage.get('prompt_tokens') or usage.get('input_tokens') or 0
        output_tokens = usage.get('completion_tokens') or usage.get('output_tokens') or 0

    total_tokens = input_tokens + output_tokens
    logger.info(f"[LLM Stats] Input: {input_tokens}, Output: {output_tokens}, Total: {total_tokens}")

    if LANGFUSE_ENABLED and langfuse_client:
        langfuse_client.update_current_generation(
            model=MODEL_NAME,
            usage_details={
                "input": input_tokens,
                "output": output_tokens,
                "total": total_tokens
            },
            model_parameters={
                "temperature": temperature,
                "max_tokens": max_tokens
            },
            metadata={"mode": "json"}
        )


@observe(name="call_llm_json", as_type="generation")
def call_llm_json(
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.1,
    max_tokens: int = 16384
) -> Dict[str, Any]:
    """
    Executes a structured JSON request and returns the parsed object.
    Raises GenerationError when the call fails, times out or the reply is not JSON.
    """
    logger.info(f"[LLM Service] Calling Model (JSON): {MODEL_NAME}")

    llm = get_llm(temperature=temperature, max_tokens=max_tokens, json_mode=True)
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_prompt)
    ]

    try:
        response = llm.invoke(messages)
    except Exception as e:
        kind = "timed out" if "timeout" in type(e).__name__.lower() or "timed out" in str(e).lower() else "failed"
        logger.error(f"[LLM Service] JSON call {kind}: {e}")
        raise GenerationError(f"Model call {kind}", details=str(e)) from e

    content = response.content if isinstance(response.content, str) else str(response.content or "")
    if not content.strip():
        raise GenerationError("Model returned an empty response")

    _log_usage(response, temperature, max_tokens)

    parsed = _parse_json_from_text(content)
    if parsed is None:
        logger.error(f"[LLM Service] Unparsable response: {content[:500]}")
        raise GenerationError("Model returned invalid JSON", details=content[:500])
    return parsed


def _parse_json_from_text(text: str) -> Optional[Dict]:
    """
    Robust JSON parser: strips markdown fences and surrounding prose,
    then retries with trailing-comma and single-quote-key repairs.
    Returns None when nothing parses into a JSON object.
    """
    cleaned_text = text.strip()

    # 1. Strip Markdown Code Blocks
    if "```json" in cleaned_text:
        parts = cleaned_text.split("```json")
        if len(parts) > 1:
            cleaned_text = parts[1].split("```")[0].strip()
    elif "```" in cleaned_text:
        cleaned_text = cleaned_text.replace("```", "").strip()

    start_idx = cleaned_text.find('{')
    end_idx = cleaned_text.rfind('}')

    if start_idx != -1 and end_idx != -1:
        cleaned_text = cleaned_text[start_idx:end_idx+1]

    try:
        parsed = json.loads(cleaned_text)
        return parsed if isinstance(parsed, dict) else None
    except json.JSONDecodeError as e:
        logger.warning(f"[LLM Service] Initial JSON parse failed: {e}. Attempting JSON repair...")

    repaired_text = cleaned_text
    repaired_text = re.sub(r',\s*}', '}', repaired_text)
    repaired_text = re.sub(r',\s*]', ']', repaired_text)
    # Quotes
    repaired_text = re.sub(r"(?<=[{,\[])\s*'([^']+)'\s*:", r'"\1":', repaired_text)

    try:
        parsed = json.loads(repaired_text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
