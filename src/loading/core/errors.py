"""Exception hierarchy for the loading indicator."""

from __future__ import annotations


class LoadingError(Exception):
    """Base class for all loading-indicator errors."""


class ConfigurationError(LoadingError):
    """Raised at construction when the configuration or sink is unusable."""


class ConcurrencyFault(LoadingError):
    """Raised inside the renderer thread when it dies unexpectedly.

    Never propagated to the caller: ``Loading.end()`` treats a faulted
    renderer as already stopped. The fault stays available on
    ``Renderer.fault`` for inspection.
    """
