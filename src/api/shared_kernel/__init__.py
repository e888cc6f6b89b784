"""Shared Kernel module.

Holds what every bounded context and the shared infrastructure agree on:
the request mediator and its pipeline behaviors, the cache, messaging and
secret ports, and the observation context bound onto domain probes.

Nothing here imports a bounded context or an adapter.
"""
