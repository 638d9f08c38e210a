"""TxROM / MMC3 board (mapper 004)."""

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
    ReadTarget,
    ResetKind,
    WriteTarget,
)
from nesboards.mem import MemBanks


class Mmc3Revision(enum.Enum):
    """MMC3 chip revision, which decides how the scanline IRQ fires."""

    A = "a"
    BC = "bc"
    # Acclaim clone that clocks on the falling edge of A12.
    ACC = "acc"


@dataclass
class _TxRegs:
    bank_select: int = 0x00
    bank_values: list[int] = field(default_factory=lambda: [0x00] * 8)
    irq_latch: int = 0x00
    irq_counter: int = 0x00
    irq_enabled: bool = False
    irq_reload: bool = False
    last_clock: int = 0x0000


@dataclass(eq=False)
class Txrom(Mapper):
    """MMC3 board with 8K PRG banks, 1K/2K CHR banks and a scanline IRQ counter."""

    PRG_WINDOW: ClassVar[int] = 8 * 1024
    CHR_WINDOW: ClassVar[int] = 1024
    FOUR_SCREEN_RAM_SIZE: ClassVar[int] = 4 * 1024
    PRG_RAM_SIZE: ClassVar[int] = 8 * 1024
    CHR_RAM_SIZE: ClassVar[int] = 8 * 1024
    PRG_MODE_MASK: ClassVar[int] = 0x40
    CHR_INVERSION_MASK: ClassVar[int] = 0x80

    mirroring: Mirroring
    chr_banks: MemBanks
    prg_ram_banks: MemBanks
    prg_rom_banks: MemBanks
    revision: Mmc3Revision = Mmc3Revision.BC
    regs: _TxRegs = field(default_factory=_TxRegs)
    _irq_pending: bool = False

    @classmethod
    def load(cls, cart: Cart) -> Txrom:
        """Attach board memories to `cart` and build the mapper."""
        cart.add_prg_ram(cls.PRG_RAM_SIZE)
        if cart.mirroring is Mirroring.FOUR_SCREEN:
            cart.add_ex_ram(cls.FOUR_SCREEN_RAM_SIZE)
        if not cart.has_chr():
            cart.add_chr_ram(cls.CHR_RAM_SIZE)
        txrom = cls(
            mirroring=cart.mirroring,
            chr_banks=MemBanks(0x0000, 0x1FFF, cart.chr_len(), cls.CHR_WINDOW),
            prg_ram_banks=MemBanks(0x6000, 0x7FFF, len(cart.prg_ram), cls.PRG_WINDOW),
            prg_rom_banks=MemBanks(0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_WINDOW),
        )
        last = txrom.prg_rom_banks.last()
        txrom.prg_rom_banks.set(2, last - 1)
        txrom.prg_rom_banks.set(3, last)
        return txrom

    def set_revision(self, revision: Mmc3Revision) -> None:
        """Select the chip revision."""
        self.revision = revision

    def _update_banks(self) -> None:
        regs = self.regs
        prg = self.prg_rom_banks
        prg_last = prg.last()
        prg_lo = regs.bank_values[6]
        prg_hi = regs.bank_values[7]
        if regs.bank_select & self.PRG_MODE_MASK == self.PRG_MODE_MASK:
            prg.set(0, prg_last - 1)
            prg.set(1, prg_hi)
            prg.set(2, prg_lo)
        else:
            prg.set(0, prg_lo)
            prg.set(1, prg_hi)
            prg.set(2, prg_last - 1)
        prg.set(3, prg_last)

        # Inverted: two 2K banks at $1000-$1FFF, four 1K banks at $0000-$0FFF.
        chr_values = regs.bank_values
        banks = self.chr_banks
        if regs.bank_select & self.CHR_INVERSION_MASK == self.CHR_INVERSION_MASK:
            one_k_base, two_k_base = 0, 4
        else:
            one_k_base, two_k_base = 4, 0
        banks.set_range(two_k_base, two_k_base + 1, chr_values[0] & 0xFE)
        banks.set_range(two_k_base + 2, two_k_base + 3, chr_values[1] & 0xFE)
        for offset, value in enumerate(chr_values[2:6]):
            banks.set(one_k_base + offset, value)

    def _clock_irq(self, addr: int) -> None:
        if addr >= 0x2000:
            return
        regs = self.regs
        next_clock = (addr >> 12) & 1
        last, nxt = (1, 0) if self.revision is Mmc3Revision.ACC else (0, 1)
        if regs.last_clock == last and next_clock == nxt:
            counter = regs.irq_counter
            if counter == 0 or regs.irq_reload:
                regs.irq_counter = regs.irq_latch
            else:
                regs.irq_counter -= 1
            if (
                (counter & 0x01 == 0x01
                 or self.revision is Mmc3Revision.BC
                 or regs.irq_reload)
                and regs.irq_counter == 0
                and regs.irq_enabled
            ):
                self._irq_pending = True
            regs.irq_reload = False
        regs.last_clock = next_clock

    def irq_pending(self) -> bool:
        return self._irq_pending

    def ppu_bus_read(self, addr: int) -> None:
        self._clock_irq(addr)

    def ppu_bus_write(self, addr: int, val: int) -> None:
        self._clock_irq(addr)

    def map_read(self, addr: int) -> MappedRead:
        self._clock_irq(addr)
        return self.map_peek(addr)

    def map_peek(self, addr: int) -> MappedRead:
        if 0x0000 <= addr <= 0x1FFF:
            return MappedRead(ReadTarget.CHR, self.chr_banks.translate(addr))
        if 0x2000 <= addr <= 0x3EFF and self.mirroring is Mirroring.FOUR_SCREEN:
            return MappedRead(ReadTarget.EX_RAM, addr & 0x1FFF)
        if 0x6000 <= addr <= 0x7FFF:
            return MappedRead(ReadTarget.PRG_RAM, self.prg_ram_banks.translate(addr))
        if 0x8000 <= addr <= 0xFFFF:
            return MappedRead(ReadTarget.PRG_ROM, self.prg_rom_banks.translate(addr))
        return MappedRead(ReadTarget.NONE)

    def map_write(self, addr: int, val: int) -> MappedWrite:
        if 0x0000 <= addr <= 0x1FFF:
            return MappedWrite(WriteTarget.CHR, self.chr_banks.translate(addr), val)
        if 0x2000 <= addr <= 0x3EFF and self.mirroring is Mirroring.FOUR_SCREEN:
            return MappedWrite(WriteTarget.EX_RAM, addr & 0x1FFF, val)
        if 0x6000 <= addr <= 0x7FFF:
            return MappedWrite(
                WriteTarget.PRG_RAM, self.prg_ram_banks.translate(addr), val
            )
        if 0x8000 <= addr <= 0xFFFF:
            self._write_register(addr & 0xE001, val)
        return MappedWrite(WriteTarget.NONE)

    def _write_register(self, reg: int, val: int) -> None:
        regs = self.regs
        if reg == 0x8000:
            regs.bank_select = val
            self._update_banks()
        elif reg == 0x8001:
            regs.bank_values[regs.bank_select & 0x07] = val
            self._update_banks()
        elif reg == 0xA000:
            if self.mirroring is not Mirroring.FOUR_SCREEN:
                self.mirroring = (
                    Mirroring.HORIZONTAL if val & 0x01 else Mirroring.VERTICAL
                )
                self._update_banks()
        elif reg == 0xA001:
            pass  # PRG-RAM protect is not emulated
        elif reg == 0xC000:
            regs.irq_latch = val
        elif reg == 0xC001:
            regs.irq_reload = True
        elif reg == 0xE000:
            self._irq_pending = False
            regs.irq_enabled = False
        elif reg == 0xE001:
            regs.irq_enabled = True

    def reset(self, kind: ResetKind) -> None:
        self._irq_pending = False
        self.regs = _TxRegs()
        self._update_banks()