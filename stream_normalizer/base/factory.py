"""Provider adapter factory.

Purpose
-------
Centralize creation of ``ProviderAdapter`` instances from a canonical
provider name. Adapter modules are imported lazily using ``importlib`` so
the SDK of an unused provider is never imported.

Timeout and fallback semantics
------------------------------
No retries or fallbacks: the factory either returns an instance or raises
:class:`UnknownProviderError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .models import ProviderKind


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The provider module cannot be imported or the adapter class is missing.
    - The adapter constructor raised an exception during initialization.
    """


class ProviderFactory:
    """Create provider adapters based on a canonical name (``"anthropic"``/``"openai"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        ProviderKind.ANTHROPIC.value: {
            "module": "stream_normalizer.anthropic.client",
            "class": "AnthropicAdapter",
        },
        ProviderKind.OPENAI.value: {
            "module": "stream_normalizer.openai.client",
            "class": "OpenAIAdapter",
        },
    }

    @classmethod
    def create(cls, provider: str | ProviderKind, **kwargs: Any) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name or :class:`ProviderKind`.
        **kwargs:
            Adapter constructor kwargs (``client``, ``settings``, ...).

        Raises
        ------
        UnknownProviderError
            If the provider is unknown, its module fails to import, the class
            is missing, or the constructor raises.
        """
        name = provider.value if isinstance(provider, ProviderKind) else (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


def create_adapter(provider: str | ProviderKind, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_adapter"]
