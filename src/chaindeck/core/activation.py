"""Module activation hooks.

Pressing a module button hands the module to a ModuleActivator; what
"activation" means (a log line, a MIDI note, ...) is up to the activator.
"""

import logging
from typing import Protocol, runtime_checkable

from chaindeck.models import Chain, Module

logger = logging.getLogger(__name__)


@runtime_checkable
class ModuleActivator(Protocol):
    """Receives module button presses and releases."""

    def activate(self, chain: Chain, module: Module) -> None:
        ...

    def release(self, chain: Chain, module: Module) -> None:
        ...


class LoggingActivator:
    """Default activator: logs the activated module record."""

    def activate(self, chain: Chain, module: Module) -> None:
        logger.info(
            f"Module '{module.device_name}' activated in chain '{chain.name}':\n"
            f"{module.model_dump_json(indent=2)}"
        )

    def release(self, chain: Chain, module: Module) -> None:
        logger.debug(f"Module '{module.device_name}' released in chain '{chain.name}'")
