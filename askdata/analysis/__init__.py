import importlib
import logging
from collections.abc import Callable

from askdata.analysis.models import AnalysisContext, AnalysisResult

log = logging.getLogger(__name__)

_REGISTRY: dict[str, Callable[[AnalysisContext], AnalysisResult]] = {}

# Intent handler modules, imported at bottom to auto-register
_MODULES = [
    "askdata.analysis.statistics",
    "askdata.analysis.visualization",
    "askdata.analysis.records",
]


def register(name: str):
    """Decorator to register a handler for one intent type."""

    def decorator(fn):
        _REGISTRY[name] = fn
        return fn

    return decorator


def available() -> list[str]:
    return sorted(_REGISTRY)


def run_analysis(intent_type: str, ctx: AnalysisContext) -> AnalysisResult:
    """Dispatch to the registered handler for ``intent_type``."""
    fn = _REGISTRY.get(intent_type)
    if not fn:
        raise ValueError(
            f"Unknown intent type: {intent_type}. "
            f"Available: {', '.join(available())}"
        )
    log.info("Running %s handler over %d rows", intent_type, len(ctx.rows))
    return fn(ctx)


# Auto-import modules to trigger @register decorators
for _mod in _MODULES:
    importlib.import_module(_mod)
