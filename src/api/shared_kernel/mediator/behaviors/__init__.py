"""Pipeline behaviors, listed outermost first.

Logging -> Validation -> Caching -> Resiliency -> Handler
"""

from shared_kernel.mediator.behaviors.caching import CachingBehavior, build_cache_key
from shared_kernel.mediator.behaviors.logging import LoggingBehavior
from shared_kernel.mediator.behaviors.resiliency import (
    TRANSIENT_ERRORS,
    ResiliencyBehavior,
)
from shared_kernel.mediator.behaviors.validation import ValidationBehavior

__all__ = [
    "CachingBehavior",
    "LoggingBehavior",
    "ResiliencyBehavior",
    "TRANSIENT_ERRORS",
    "ValidationBehavior",
    "build_cache_key",
]
