"""SxROM / MMC1 board (mapper 001)."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar

from nesboards.mapping import (
    Cart,
    MappedRead,
    MappedWrite,
    Mapper,
    Mirroring,
    ResetKind,
)
from nesboards.mem import MemBanks


class Mmc1Revision(enum.Enum):
    """MMC1 chip revision."""

    A = "a"
    BC = "bc"


_DEFAULT_SHIFT_REGISTER = 0x10  # the set bit marks when five bits have arrived
_DEFAULT_PRG_MODE = 0x0C  # mode 3: 16K switchable at $8000, last bank fixed


@dataclass
class _SxRegs:
    write_just_occurred: int = 0x00
    shift_register: int = _DEFAULT_SHIFT_REGISTER  # $8000-$FFFF serial port
    control: int = _DEFAULT_PRG_MODE  # $8000-$9FFF
    chr0: int = 0x00  # $A000-$BFFF
    chr1: int = 0x00  # $C000-$DFFF
    prg: int = 0x00  # $E000-$FFFF

    def __repr__(self) -> str:
        return (
            f"SxRegs(write_just_occurred={self.write_just_occurred}, "
            f"shift_register=0b{self.shift_register:08b}, "
            f"control=0x{self.control:02X}, chr0=0x{self.chr0:02X}, "
            f"chr1=0x{self.chr1:02X}, prg=0x{self.prg:02X})"
        )


_MIRRORING_MODES = (
    Mirroring.SINGLE_SCREEN_A,
    Mirroring.SINGLE_SCREEN_B,
    Mirroring.VERTICAL,
    Mirroring.HORIZONTAL,
)


@dataclass(eq=False)
class Sxrom(Mapper):
    """MMC1 board with a 5-bit serial register interface."""

    PRG_RAM_WINDOW: ClassVar[int] = 8 * 1024
    PRG_ROM_WINDOW: ClassVar[int] = 16 * 1024
    CHR_WINDOW: ClassVar[int] = 4 * 1024
    PRG_RAM_SIZE: ClassVar[int] = 32 * 1024  # safely compatible without a NES 2.0 header
    CHR_RAM_SIZE: ClassVar[int] = 8 * 1024

    SHIFT_REG_RESET: ClassVar[int] = 0x80
    DEFAULT_SHIFT_REGISTER: ClassVar[int] = _DEFAULT_SHIFT_REGISTER
    MIRRORING_MASK: ClassVar[int] = 0x03
    PRG_MODE_MASK: ClassVar[int] = 0x0C
    CHR_MODE_MASK: ClassVar[int] = 0x10
    DEFAULT_PRG_MODE: ClassVar[int] = _DEFAULT_PRG_MODE
    PRG_BANK_MASK: ClassVar[int] = 0x0F
    PRG_RAM_DISABLED: ClassVar[int] = 0x10

    submapper_num: int
    board: Mmc1Revision
    chr_select: bool
    chr_banks: MemBanks
    prg_ram_banks: MemBanks
    prg_rom_banks: MemBanks
    mirroring: Mirroring = Mirroring.SINGLE_SCREEN_A
    regs: _SxRegs = field(default_factory=_SxRegs)

    @classmethod
    def load(cls, cart: Cart, board: Mmc1Revision) -> Sxrom:
        """Attach board memories to `cart` and build the mapper."""
        if not cart.has_prg_ram():
            cart.add_prg_ram(cls.PRG_RAM_SIZE)
        if not cart.has_chr():
            cart.add_chr_ram(cls.CHR_RAM_SIZE)
        sxrom = cls(
            submapper_num=cart.submapper_num,
            board=board,
            chr_select=len(cart.prg_rom) == 0x80000,
            chr_banks=MemBanks(0x0000, 0x1FFF, cart.chr_len(), cls.CHR_WINDOW),
            prg_ram_banks=MemBanks(
                0x6000, 0x7FFF, len(cart.prg_ram), cls.PRG_RAM_WINDOW
            ),
            prg_rom_banks=MemBanks(
                0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_ROM_WINDOW
            ),
        )
        sxrom._update_banks(0x0000)
        return sxrom

    def _update_banks(self, addr: int) -> None:
        regs = self.regs
        self.mirroring = _MIRRORING_MODES[regs.control & self.MIRRORING_MASK]

        chr4k = regs.control & self.CHR_MODE_MASK == self.CHR_MODE_MASK
        if chr4k:
            self.chr_banks.set(0, regs.chr0)
            self.chr_banks.set(1, regs.chr1)
        else:
            self.chr_banks.set_range(0, 1, regs.chr0 & 0x1E)  # low bit ignored

        if self.submapper_num == 5:
            # SEROM, SHROM and SH1ROM have a fixed 32K PRG-ROM.
            self.prg_rom_banks.set_range(0, 1, 0)
            return

        extra_reg = regs.chr1 if 0xC000 <= addr <= 0xDFFF and chr4k else regs.chr0
        bank_select = extra_reg & self.CHR_MODE_MASK if self.chr_select else 0x00
        prg_bank = regs.prg & self.PRG_BANK_MASK
        prg_mode = (regs.control & self.PRG_MODE_MASK) >> 2
        if prg_mode in (0, 1):
            self.prg_rom_banks.set_range(0, 1, bank_select | (prg_bank & 0x1E))
        elif prg_mode == 2:
            self.prg_rom_banks.set(0, bank_select)
            self.prg_rom_banks.set(1, bank_select | prg_bank)
        else:
            last = self.prg_rom_banks.last()
            self.prg_rom_banks.set(0, bank_select | prg_bank)
            self.prg_rom_banks.set(1, bank_select | last)

    def prg_ram_enabled(self) -> bool:
        """Whether PRG-RAM responds; always true on revision A."""
        return (
            self.board is Mmc1Revision.A
            or self.regs.prg & self.PRG_RAM_DISABLED == 0
        )

    def _prg_ram_map(self):
        return self.prg_ram_banks.translate if self.prg_ram_enabled() else None

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr,
            chr_map=self.chr_banks.translate,
            prg_ram_map=self._prg_ram_map(),
            prg_rom_map=self.prg_rom_banks.translate,
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(
            addr,
            val,
            chr_map=self.chr_banks.translate,
            prg_ram_map=self._prg_ram_map(),
            registers=self._serial_write,
        )

    def _serial_write(self, addr: int, val: int) -> None:
        # Bits arrive LSB first; the fifth write commits to the register
        # selected by the address. Writes on consecutive cycles are ignored.
        regs = self.regs
        if regs.write_just_occurred > 0:
            return
        regs.write_just_occurred = 2
        if val & self.SHIFT_REG_RESET:
            regs.shift_register = self.DEFAULT_SHIFT_REGISTER
            regs.control |= self.PRG_MODE_MASK
            return
        full = regs.shift_register & 1 == 1
        regs.shift_register = (regs.shift_register >> 1) | ((val & 1) << 4)
        if not full:
            return
        if addr <= 0x9FFF:
            regs.control = regs.shift_register
        elif addr <= 0xBFFF:
            regs.chr0 = regs.shift_register & 0x1F
        elif addr <= 0xDFFF:
            regs.chr1 = regs.shift_register & 0x1F
        else:
            regs.prg = regs.shift_register & 0x1F
        regs.shift_register = self.DEFAULT_SHIFT_REGISTER
        self._update_banks(addr)

    def clock(self) -> int:
        if self.regs.write_just_occurred > 0:
            self.regs.write_just_occurred -= 1
        return 1

    def reset(self, kind: ResetKind) -> None:
        self.regs.shift_register = self.DEFAULT_SHIFT_REGISTER
        self.regs.control = self.DEFAULT_PRG_MODE
        self.regs.prg = self.PRG_RAM_DISABLED
        self._update_banks(0x0000)
        if kind is ResetKind.HARD:
            self.regs.write_just_occurred = 0