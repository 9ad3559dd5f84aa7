"""Provider factory and registry for swappable summary backends."""

from __future__ import annotations

from ..config import SummaryConfig
from .base import SummaryProvider
from .placeholder import PlaceholderSummarizer


ProviderBuilder = type[SummaryProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "placeholder": PlaceholderSummarizer,
}


def available_summarizers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_summarizer(cfg: SummaryConfig) -> SummaryProvider:
    """Build a summary provider instance from runtime config."""
    name = cfg.provider.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_summarizers())
        raise ValueError(f"Unsupported summary provider: {cfg.provider}. Supported: {supported}")
    return builder(cfg)
