"""Caching port shared by the mediator pipeline and its adapters."""

from shared_kernel.caching.ports import ICacheService

__all__ = ["ICacheService"]
