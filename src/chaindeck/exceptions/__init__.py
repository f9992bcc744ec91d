"""
Custom exception hierarchy for chaindeck.

## Exception Hierarchy

```
ChainDeckError (base)
├── DeviceError
│   ├── DeviceNotFoundError
│   ├── DeviceOpenFailedError
│   ├── DeviceWriteError
│   └── MidiPortError
├── RenderError
├── CatalogError
│   ├── CatalogFileNotFoundError
│   ├── CatalogFileInvalidError
│   └── EmptyCatalogError
├── MalformedEventError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

Only DeviceNotFoundError and DeviceOpenFailedError are fatal; everything else
is logged and the controller keeps serving input in its current state.
"""

from .base import ChainDeckError
from .catalog import (
    CatalogError,
    CatalogFileInvalidError,
    CatalogFileNotFoundError,
    EmptyCatalogError,
)
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import (
    DeviceError,
    DeviceNotFoundError,
    DeviceOpenFailedError,
    DeviceWriteError,
    MidiPortError,
    RenderError,
)
from .events import MalformedEventError
from .handlers import (
    ErrorCollector,
    ErrorContext,
    collect_errors,
    format_error_for_display,
    wrap_pydantic_error,
)

__all__ = [
    # Catalog
    "CatalogError",
    "CatalogFileInvalidError",
    "CatalogFileNotFoundError",
    # Base
    "ChainDeckError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceError",
    "DeviceNotFoundError",
    "DeviceOpenFailedError",
    "DeviceWriteError",
    "EmptyCatalogError",
    # Handlers
    "ErrorCollector",
    "ErrorContext",
    # Events
    "MalformedEventError",
    "MidiPortError",
    "RenderError",
    "collect_errors",
    "format_error_for_display",
    "wrap_pydantic_error",
]
