"""Shared mapper vocabulary: mirroring, bus results, cartridge memory and the base mapper."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

from nesboards.mem import RamState

Translate = Callable[[int], int]
RegisterWrite = Callable[[int, int], None]

_CHR_WINDOW = range(0x0000, 0x2000)
_PRG_RAM_WINDOW = range(0x6000, 0x8000)
_PRG_ROM_WINDOW = range(0x8000, 0x10000)


class Mirroring(enum.Enum):
    """Nametable mirroring arrangement."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    SINGLE_SCREEN_A = "single_screen_a"
    SINGLE_SCREEN_B = "single_screen_b"
    FOUR_SCREEN = "four_screen"


class ResetKind(enum.Enum):
    """Soft (reset button) or hard (power cycle) reset."""

    SOFT = "soft"
    HARD = "hard"


class ReadTarget(enum.Enum):
    """Where a mapped read is served from."""

    NONE = "none"
    DATA = "data"
    CHR = "chr"
    PRG_RAM = "prg_ram"
    PRG_ROM = "prg_rom"
    CIRAM = "ciram"
    EX_RAM = "ex_ram"


class WriteTarget(enum.Enum):
    """Where a mapped write lands."""

    NONE = "none"
    CHR = "chr"
    PRG_RAM = "prg_ram"
    PRG_RAM_PROTECT = "prg_ram_protect"
    CIRAM = "ciram"
    EX_RAM = "ex_ram"


@dataclass(frozen=True)
class MappedRead:
    """Result of mapping a read: a target and an offset, or literal data for DATA."""

    target: ReadTarget
    value: int = 0


@dataclass(frozen=True)
class MappedWrite:
    """Result of mapping a write: a target, an offset and the byte written."""

    target: WriteTarget
    address: int = 0
    value: int = 0


@dataclass
class Cart:
    """Cartridge memories a mapper is loaded against."""

    prg_rom: bytes = b""
    chr_rom: bytes = b""
    mirroring: Mirroring = Mirroring.HORIZONTAL
    submapper_num: int = 0
    ram_state: RamState = RamState.ALL_ZEROS
    prg_ram: bytearray = field(default_factory=bytearray)
    chr_ram: bytearray = field(default_factory=bytearray)
    ex_ram: bytearray = field(default_factory=bytearray)

    def has_chr(self) -> bool:
        """Whether any CHR-ROM or CHR-RAM is present."""
        return bool(self.chr_rom) or bool(self.chr_ram)

    def has_prg_ram(self) -> bool:
        """Whether PRG-RAM is present."""
        return bool(self.prg_ram)

    def chr_len(self) -> int:
        """Size of CHR memory: CHR-ROM if present, otherwise CHR-RAM."""
        return len(self.chr_rom) if self.chr_rom else len(self.chr_ram)

    def add_prg_ram(self, size: int) -> None:
        """Attach `size` bytes of PRG-RAM initialised by `ram_state`."""
        self.prg_ram = self.ram_state.allocate(size)

    def add_chr_ram(self, size: int) -> None:
        """Attach `size` bytes of CHR-RAM initialised by `ram_state`."""
        self.chr_ram = self.ram_state.allocate(size)

    def add_ex_ram(self, size: int) -> None:
        """Attach `size` bytes of extra RAM initialised by `ram_state`."""
        self.ex_ram = self.ram_state.allocate(size)


class Mapper(ABC):
    """A cartridge board translating CPU and PPU bus addresses."""

    mirroring: Mirroring

    def irq_pending(self) -> bool:
        """Whether the board is asserting IRQ."""
        return False

    def map_read(self, addr: int) -> MappedRead:
        """Map a read that may change board state. Defaults to `map_peek`."""
        return self.map_peek(addr)

    @abstractmethod
    def map_peek(self, addr: int) -> MappedRead:
        """Map a read without side effects."""

    @abstractmethod
    def map_write(self, addr: int, val: int) -> MappedWrite:
        """Map a write, updating registers where addressed."""

    def ppu_bus_read(self, addr: int) -> None:
        """Observe a PPU bus read; boards without PPU snooping ignore it."""
        del addr

    def ppu_bus_write(self, addr: int, val: int) -> None:
        """Observe a PPU bus write; boards without PPU snooping ignore it."""
        del addr, val

    def cpu_bus_write(self, addr: int, val: int) -> None:
        """Observe a CPU bus write; boards without CPU snooping ignore it."""
        del addr, val

    def clock(self) -> int:
        """Advance one CPU cycle; returns cycles consumed."""
        return 0

    def reset(self, kind: ResetKind) -> None:
        """Reset board state."""

    @staticmethod
    def _direct(addr: int) -> int:
        return addr

    @staticmethod
    def _prg_ram_8k(addr: int) -> int:
        return addr & 0x1FFF

    @staticmethod
    def _fixed_prg_rom(mirror_prg_rom: bool) -> Translate:
        """Fixed PRG-ROM at $8000; the upper 16K mirrors the lower when only 16K exists."""
        high_mask = 0x3FFF if mirror_prg_rom else 0x7FFF

        def translate(addr: int) -> int:
            return addr & (0x3FFF if addr <= 0xBFFF else high_mask)

        return translate

    @staticmethod
    def _route_read(
        addr: int,
        *,
        chr_map: Optional[Translate] = None,
        prg_ram_map: Optional[Translate] = None,
        prg_rom_map: Optional[Translate] = None,
    ) -> MappedRead:
        """Map `addr` through the CHR, PRG-RAM and PRG-ROM windows; None leaves a window unmapped."""
        for window, target, translate in (
            (_CHR_WINDOW, ReadTarget.CHR, chr_map),
            (_PRG_RAM_WINDOW, ReadTarget.PRG_RAM, prg_ram_map),
            (_PRG_ROM_WINDOW, ReadTarget.PRG_ROM, prg_rom_map),
        ):
            if translate is not None and addr in window:
                return MappedRead(target, translate(addr))
        return MappedRead(ReadTarget.NONE)

    @staticmethod
    def _route_write(
        addr: int,
        val: int,
        *,
        chr_map: Optional[Translate] = None,
        prg_ram_map: Optional[Translate] = None,
        registers: Optional[RegisterWrite] = None,
    ) -> MappedWrite:
        """Map a write to CHR or PRG-RAM, or hand $8000-$FFFF to the board's registers."""
        for window, target, translate in (
            (_CHR_WINDOW, WriteTarget.CHR, chr_map),
            (_PRG_RAM_WINDOW, WriteTarget.PRG_RAM, prg_ram_map),
        ):
            if translate is not None and addr in window:
                return MappedWrite(target, translate(addr), val)
        if registers is not None and addr in _PRG_ROM_WINDOW:
            registers(addr, val)
        return MappedWrite(WriteTarget.NONE)