"""Memory access helpers, power-on RAM states and bank switching windows."""

from __future__ import annotations

import enum
import random
from abc import ABC, abstractmethod
from collections.abc import MutableSequence


class Access(enum.Enum):
    """Kind of bus access being performed."""

    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"
    DUMMY = "dummy"


class Mem(ABC):
    """A 16-bit addressable memory device."""

    def read(self, addr: int, access: Access = Access.READ) -> int:
        """Read a byte; may have side effects. Defaults to `peek`."""
        return self.peek(addr, access)

    @abstractmethod
    def peek(self, addr: int, access: Access = Access.READ) -> int:
        """Read a byte without side effects."""

    def read_u16(self, addr: int, access: Access = Access.READ) -> int:
        """Read a little-endian word, wrapping at the end of the address space."""
        lo = self.read(addr, access)
        hi = self.read((addr + 1) & 0xFFFF, access)
        return lo | (hi << 8)

    def peek_u16(self, addr: int, access: Access = Access.READ) -> int:
        """Peek a little-endian word, wrapping at the end of the address space."""
        lo = self.peek(addr, access)
        hi = self.peek((addr + 1) & 0xFFFF, access)
        return lo | (hi << 8)

    @abstractmethod
    def write(self, addr: int, val: int, access: Access = Access.WRITE) -> None:
        """Write a byte."""

    def write_u16(self, addr: int, val: int, access: Access = Access.WRITE) -> None:
        """Write the low then the high byte of `val`, both to `addr`."""
        self.write(addr, val & 0xFF, access)
        self.write(addr, (val >> 8) & 0xFF, access)


_RAM_STATE_ERROR = (
    "invalid RamState value. valid options: `all_zeros`, `all_ones`, or `random`"
)


class RamState(enum.Enum):
    """Power-on contents of RAM."""

    ALL_ZEROS = "all_zeros"
    ALL_ONES = "all_ones"
    RANDOM = "random"

    @classmethod
    def from_index(cls, value: int) -> RamState:
        """Map 0 and 1 to the fixed states; anything else is random."""
        return {0: cls.ALL_ZEROS, 1: cls.ALL_ONES}.get(value, cls.RANDOM)

    @classmethod
    def parse(cls, text: str) -> RamState:
        """Parse `all_zeros`, `all_ones` or `random`."""
        for state in cls:
            if state.value == text:
                return state
        raise ValueError(_RAM_STATE_ERROR)

    def label(self) -> str:
        """Human readable name."""
        return {
            RamState.ALL_ZEROS: "All $00",
            RamState.ALL_ONES: "All $FF",
            RamState.RANDOM: "Random",
        }[self]

    def fill(self, ram: MutableSequence[int]) -> None:
        """Overwrite `ram` in place according to this state."""
        size = len(ram)
        if self is RamState.ALL_ZEROS:
            ram[:] = bytes(size)
        elif self is RamState.ALL_ONES:
            ram[:] = b"\xff" * size
        else:
            ram[:] = random.randbytes(size)

    def allocate(self, capacity: int) -> bytearray:
        """Return a new RAM buffer of `capacity` bytes filled for this state."""
        ram = bytearray(capacity)
        self.fill(ram)
        return ram


class MemBanks:
    """Maps fixed-size address windows onto switchable pages of a larger memory."""

    def __init__(self, start: int, end: int, capacity: int, window: int) -> None:
        if window <= 0:
            raise ValueError("window must be positive")
        self.start = start
        self.end = end
        self.size = end - start
        self.window = window
        self.shift = (window & -window).bit_length() - 1
        self.page_count = max(1, capacity // window)
        self.mask = self.page_count - 1
        self.banks = [slot * window for slot in range((self.size + 1) // window)]

    def set(self, slot: int, bank: int) -> None:
        """Point `slot` at page `bank`, wrapped to the available pages."""
        self.banks[slot] = (bank & self.mask) << self.shift

    def set_range(self, start: int, end: int, bank: int) -> None:
        """Point slots `start..=end` at consecutive pages starting at `bank`."""
        new_addr = (bank & self.mask) << self.shift
        for slot in range(start, end + 1):
            self.banks[slot] = new_addr
            new_addr += self.window

    def last(self) -> int:
        """Index of the last page."""
        return max(self.page_count - 1, 0)

    def get_bank(self, addr: int) -> int:
        """Slot that `addr` falls into."""
        return (addr & self.size) >> self.shift

    def translate(self, addr: int) -> int:
        """Translate a bus address into an offset in the backing memory."""
        page = self.banks[self.get_bank(addr)]
        return page | (addr & (self.window - 1))

    def __repr__(self) -> str:
        return (
            f"Bank(start=0x{self.start:04X}, end=0x{self.end:04X}, "
            f"size=0x{self.size:04X}, window=0x{self.window:04X}, "
            f"shift={self.shift}, mask={self.mask}, banks={self.banks}, "
            f"page_count={self.page_count})"
        )