"""Shell descriptor storage."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sitecrate.errors import ShellDescriptorError
from sitecrate.interfaces import ShellDescriptorManager
from sitecrate.models import ShellDescriptor, ShellParameter

logger = logging.getLogger(__name__)


class InMemoryShellDescriptorManager(ShellDescriptorManager):
    """Holds the current descriptor and bumps its serial number on update.

    ``on_change`` callbacks run after every successful update with the new
    descriptor.
    """

    def __init__(
        self,
        descriptor: ShellDescriptor | None = None,
        on_change: list[Callable[[ShellDescriptor], None]] | None = None,
    ) -> None:
        self._descriptor = descriptor or ShellDescriptor()
        self._on_change = list(on_change or [])

    def get_shell_descriptor(self) -> ShellDescriptor:
        return self._descriptor.model_copy(deep=True)

    def update_shell_descriptor(
        self,
        prior_serial_number: int,
        features: list[str],
        parameters: list[ShellParameter],
    ) -> None:
        if prior_serial_number != self._descriptor.serial_number:
            raise ShellDescriptorError(
                f"Invalid serial number for shell descriptor: "
                f"expected {self._descriptor.serial_number}, got {prior_serial_number}"
            )
        self._descriptor = ShellDescriptor(
            serial_number=prior_serial_number + 1,
            features=list(features),
            parameters=[p.model_copy() for p in parameters],
        )
        logger.info("Shell descriptor updated to serial %d", self._descriptor.serial_number)
        for callback in self._on_change:
            callback(self.get_shell_descriptor())
