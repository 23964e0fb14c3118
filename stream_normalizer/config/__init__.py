"""Unified configuration layer for the normalizer.

Goals
-----
* Centralize defaults (models, search scoping, classifier tunables).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``NORMALIZER_CONFIG_FILE``
    3. Environment variables (e.g. ``ANTHROPIC_MODEL``, ``NORMALIZER_PREAMBLE_CAP``)
    4. In-code overrides passed to the helper
* Provide two call sites: ``get_provider_config(provider)`` for credentials
  and model defaults, and ``get_normalizer_config()`` for stream tunables.

Environment Variable Conventions
--------------------------------
``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY``, ``<PROVIDER>_BASE_URL``,
e.g. ``OPENAI_MODEL``. Normalizer tunables use the ``NORMALIZER_`` prefix
listed in ``NORMALIZER_ENV_MAP``.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
anthropic:
  model: claude-sonnet-4-5
normalizer:
  preamble_cap: 8000
  search_allowed_domains: [shopify.com, etsy.com]
```
"""
from __future__ import annotations

import json
import os
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import ANTHROPIC_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL
from .env import is_placeholder
from .settings import NormalizerSettings

# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL},
    "openai": {"model": OPENAI_DEFAULT_MODEL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}

NORMALIZER_ENV_MAP = {
    "preamble_cap": "NORMALIZER_PREAMBLE_CAP",
    "leak_window": "NORMALIZER_LEAK_WINDOW",
    "clarification_window": "NORMALIZER_CLARIFICATION_WINDOW",
    "search_allowed_domains": "NORMALIZER_SEARCH_DOMAINS",
    "search_max_uses": "NORMALIZER_SEARCH_MAX_USES",
    "thinking_budget_tokens": "NORMALIZER_THINKING_BUDGET",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("NORMALIZER_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (tests, hot reload)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field_name, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field_name] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key", None)
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def _coerce_setting(name: str, value: Any, current: Any) -> Any:
    """Coerce a raw file/env value to the type of the current setting."""
    if isinstance(current, tuple):
        if isinstance(value, str):
            parts = value.split(",")
        else:
            parts = list(value)
        return tuple(str(p).strip().lower() for p in parts if str(p).strip())
    if isinstance(current, bool):
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(current, int):
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid integer for {name}: {value!r}") from exc
    if isinstance(current, float):
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid number for {name}: {value!r}") from exc
    return str(value)


def get_normalizer_config(overrides: Optional[Dict[str, Any]] = None) -> NormalizerSettings:
    """Return the resolved :class:`NormalizerSettings`.

    Merge order (later wins): defaults -> ``normalizer`` section of the
    external config file -> ``NORMALIZER_*`` env vars -> overrides. Unknown
    keys are ignored; malformed numbers raise ``ValueError``.
    """
    _load_dotenv_once()
    settings = NormalizerSettings()
    known = {f.name for f in fields(NormalizerSettings)}
    raw: Dict[str, Any] = {}

    file_cfg = _load_external_config().get("normalizer")
    if isinstance(file_cfg, dict):
        raw |= {k: v for k, v in file_cfg.items() if k in known}

    for field_name, env_name in NORMALIZER_ENV_MAP.items():
        val = os.getenv(env_name)
        if val is not None and val.strip():
            raw[field_name] = val

    if overrides:
        raw |= {k: v for k, v in overrides.items() if k in known and v is not None}

    coerced = {k: _coerce_setting(k, v, getattr(settings, k)) for k, v in raw.items()}
    return replace(settings, **coerced)


__all__ = [
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "NORMALIZER_ENV_MAP",
    "NormalizerSettings",
    "get_provider_config",
    "get_model",
    "get_normalizer_config",
    "reset_config_cache",
]
