"""loading — animated terminal progress indicator."""

from __future__ import annotations

__version__ = "0.1.0"

from loading.core.errors import ConcurrencyFault, ConfigurationError, LoadingError  # noqa: E402
from loading.core.models import (  # noqa: E402
    FRAME_PRESETS,
    FrameSet,
    LoadingConfig,
    SpinnerFrame,
    Status,
    StatusKind,
)
from loading.services.controller import Loading  # noqa: E402

__all__ = [
    "FRAME_PRESETS",
    "ConcurrencyFault",
    "ConfigurationError",
    "FrameSet",
    "Loading",
    "LoadingConfig",
    "LoadingError",
    "SpinnerFrame",
    "Status",
    "StatusKind",
    "__version__",
]
