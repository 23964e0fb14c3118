"""Memory directive parsing and dispatch."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ...base.errors import MemoryStoreFailure
from ...base.interfaces import IMemoryStore
from ...base.log_support import LogContext
from ...base.logging import normalized_log_event
from ...base.models import MemoryDirective

DIRECTIVE_PATTERN = re.compile(r"\[REMEMBER:([^=]+)=([^:]+):(\w+)\]")


def parse_directives(text: str) -> List[MemoryDirective]:
    """Return every ``[REMEMBER:key=value:category]`` directive in ``text``."""
    return [
        MemoryDirective(key=m.group(1).strip(), value=m.group(2).strip(), category=m.group(3))
        for m in DIRECTIVE_PATTERN.finditer(text or "")
    ]


def store_directives(
    directives: List[MemoryDirective],
    store: Optional[IMemoryStore],
    conversation_id: Optional[str],
    logger: logging.Logger,
    ctx: Optional[LogContext] = None,
) -> int:
    """Forward each directive to ``store``; return how many were saved.

    Nothing is stored without both a store and a conversation id. A failing
    directive is logged and the remaining ones are still attempted.
    """
    if not directives or store is None or not conversation_id:
        return 0
    saved = 0
    for directive in directives:
        try:
            store.store_fact(conversation_id, directive.key, directive.value, directive.category)
        except MemoryStoreFailure as exc:
            _log_failure(logger, ctx, directive, exc)
            continue
        except Exception as exc:  # noqa: BLE001 - collaborator errors are isolated per directive
            _log_failure(logger, ctx, directive, MemoryStoreFailure(str(exc)))
            continue
        saved += 1
        normalized_log_event(
            logger,
            "memory.saved",
            ctx,
            phase="finalize",
            emitted=True,
            key=directive.key,
            category=directive.category,
        )
    return saved


def _log_failure(
    logger: logging.Logger,
    ctx: Optional[LogContext],
    directive: MemoryDirective,
    exc: MemoryStoreFailure,
) -> None:
    normalized_log_event(
        logger,
        "memory.error",
        ctx,
        phase="finalize",
        level=logging.WARNING,
        error_code=exc.code.value,
        emitted=False,
        key=directive.key,
        error=str(exc),
    )


__all__ = ["DIRECTIVE_PATTERN", "parse_directives", "store_directives"]
