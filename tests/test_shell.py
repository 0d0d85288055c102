"""Tests for the shell descriptor manager."""

import pytest

from sitecrate.errors import ShellDescriptorError
from sitecrate.models import ShellDescriptor, ShellParameter
from sitecrate.shell import InMemoryShellDescriptorManager


class TestInMemoryShellDescriptorManager:
    """Test descriptor updates and the serial-number guard."""

    def test_default_descriptor(self):
        descriptor = InMemoryShellDescriptorManager().get_shell_descriptor()
        assert descriptor.serial_number == 0
        assert descriptor.features == []

    def test_update_increments_serial(self):
        manager = InMemoryShellDescriptorManager(ShellDescriptor(serial_number=5))
        manager.update_shell_descriptor(5, ["Blog"], [ShellParameter(component="c", name="n")])
        descriptor = manager.get_shell_descriptor()
        assert descriptor.serial_number == 6
        assert descriptor.features == ["Blog"]
        assert descriptor.parameters[0].name == "n"

    def test_stale_serial_rejected(self):
        manager = InMemoryShellDescriptorManager(ShellDescriptor(serial_number=5))
        with pytest.raises(ShellDescriptorError, match="expected 5, got 4"):
            manager.update_shell_descriptor(4, [], [])
        assert manager.get_shell_descriptor().serial_number == 5

    def test_returned_descriptor_is_a_copy(self):
        manager = InMemoryShellDescriptorManager(ShellDescriptor(features=["A"]))
        manager.get_shell_descriptor().features.append("B")
        assert manager.get_shell_descriptor().features == ["A"]

    def test_on_change_callbacks(self):
        seen: list[int] = []
        manager = InMemoryShellDescriptorManager(
            on_change=[lambda descriptor: seen.append(descriptor.serial_number)]
        )
        manager.update_shell_descriptor(0, [], [])
        manager.update_shell_descriptor(1, [], [])
        assert seen == [1, 2]
