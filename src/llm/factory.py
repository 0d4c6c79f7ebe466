"""LLM provider factory.

Keys come from the loaded config; this module never reads the environment.
"""

from .base import LLMError, LLMProvider

_KNOWN_PROVIDERS = ("claude",)


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "claude", "auto", or None (detect from key)
        api_key: API key from config
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI

    Returns:
        LLMProvider instance
    """
    resolved = provider or "auto"

    if resolved == "auto":
        resolved = _auto_detect_provider(api_key, client)

    if resolved == "claude":
        from .providers.claude import ClaudeProvider

        if not api_key and not client:
            raise LLMError("No API key configured for claude (llm.api_key)")
        return ClaudeProvider(api_key=api_key, model=model, client=client)
    raise LLMError(f"Unknown provider: {resolved}. Use: {', '.join(_KNOWN_PROVIDERS)}")


def _detect_provider_from_key(api_key: str) -> str | None:
    """Infer provider from API key prefix."""
    if api_key.startswith("sk-ant-"):
        return "claude"
    return None


def _auto_detect_provider(api_key: str | None = None, client=None) -> str:
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred
    if api_key or client:
        # Only one backend ships today
        return "claude"
    raise LLMError("No LLM API key found. Set llm.api_key (e.g. ${ANTHROPIC_API_KEY}) in config.yaml")
