"""Resolution of ``provider:model`` references to registered providers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from finroute.core.errors import ModelNotFoundError

if TYPE_CHECKING:
    from finroute.providers.base import ModelInfo, ModelProvider

logger = logging.getLogger(__name__)


class ProviderManager:
    """Registry of provider adapters keyed by ``provider_id``.

    A model ref names a provider and a model id. Any model id is passed
    through to a registered provider, listed or not, so new models can be
    used before they are added to an adapter's catalogue.
    """

    def __init__(self) -> None:
        self._providers: dict[str, ModelProvider] = {}
        self._models: dict[str, ModelInfo] = {}

    def __len__(self) -> int:
        return len(self._providers)

    async def register(self, provider: ModelProvider) -> None:
        """Add *provider* and index the models it lists.

        Raises:
            ValueError: If the provider id is already taken.
        """
        pid = provider.provider_id
        if pid in self._providers:
            msg = f"Provider already registered: {pid}"
            raise ValueError(msg)
        models = await provider.list_models()
        self._providers[pid] = provider
        self._models.update((m.model_ref, m) for m in models)
        logger.debug("Registered provider %s with %d model(s)", pid, len(models))

    def list_all_models(self) -> list[ModelInfo]:
        """Listed models of every registered provider, in registration order."""
        return list(self._models.values())

    def get_provider(self, model_ref: str) -> tuple[ModelProvider, str]:
        """Return the provider serving *model_ref* and the bare model id.

        Raises:
            ModelNotFoundError: If the ref is not ``provider:model`` or the
                provider is not registered.
        """
        provider_id, sep, model_id = model_ref.partition(":")
        if not sep or not provider_id or not model_id:
            msg = f"Model ref must look like 'provider:model', got '{model_ref}'"
            raise ModelNotFoundError(provider_id or "unknown", msg)
        provider = self._providers.get(provider_id)
        if provider is None:
            msg = f"No provider registered for model '{model_ref}'"
            raise ModelNotFoundError(provider_id, msg)
        if model_ref not in self._models:
            logger.debug("Model %s is not in the provider's catalogue", model_ref)
        return provider, model_id
