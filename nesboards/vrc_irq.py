"""IRQ counter shared by the VRC family of boards."""

from __future__ import annotations

from dataclasses import dataclass

from nesboards.mapping import ResetKind


@dataclass
class VrcIrq:
    """8-bit up-counter with a scanline prescaler or cycle mode."""

    reload: int = 0
    counter: int = 0
    prescalar_counter: int = 0
    enabled: bool = False
    enabled_after_ack: bool = False
    cycle_mode: bool = False
    _pending: bool = False

    def write_reload(self, val: int) -> None:
        """Set the value loaded into the counter."""
        self.reload = val & 0xFF

    def write_control(self, val: int) -> None:
        """Write the control register; enabling reloads the counter."""
        self.enabled_after_ack = val & 0x01 == 0x01
        self.enabled = val & 0x02 == 0x02
        self.cycle_mode = val & 0x04 == 0x04
        if self.enabled:
            self.counter = self.reload
            self.prescalar_counter = 341
        self._pending = False

    def pending(self) -> bool:
        """Whether an IRQ is being asserted."""
        return self._pending

    def acknowledge(self) -> None:
        """Clear the IRQ and restore the enable-after-acknowledge setting."""
        self.enabled = self.enabled_after_ack
        self._pending = False

    def clock(self) -> int:
        """Advance one CPU cycle; returns 1 when the counter is running."""
        if not self.enabled:
            return 0
        self.prescalar_counter -= 3
        if self.cycle_mode or self.prescalar_counter <= 0:
            if self.counter == 0xFF:
                self.counter = self.reload
                self._pending = True
            else:
                self.counter += 1
            self.prescalar_counter += 341
        return 1

    def reset(self, kind: ResetKind) -> None:
        """Return the counter to its power-on state."""
        self.reload = 0
        self.counter = 0
        self.prescalar_counter = 0
        self.enabled = False
        self.enabled_after_ack = False
        self.cycle_mode = False