"""PxROM / MMC2 board (mapper 009)."""

from __future__ import annotations

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


@dataclass(eq=False)
class Pxrom(Mapper):
    """MMC2 board whose CHR banks switch on reads of latch tiles $FD and $FE."""

    PRG_WINDOW: ClassVar[int] = 8 * 1024
    CHR_ROM_WINDOW: ClassVar[int] = 4 * 1024
    PRG_RAM_SIZE: ClassVar[int] = 8 * 1024
    MIRRORING_MASK: ClassVar[int] = 0x01

    mirroring: Mirroring
    chr_banks: MemBanks
    prg_rom_banks: MemBanks
    # Latch per pattern table: 0 selects the $FD bank, 1 the $FE bank.
    latch: list[int] = field(default_factory=lambda: [0, 0])
    # $FD/0000, $FE/0000, $FD/1000, $FE/1000 bank numbers.
    latch_banks: list[int] = field(default_factory=lambda: [0, 0, 0, 0])

    @classmethod
    def load(cls, cart: Cart) -> Pxrom:
        """Attach board memories to `cart` and build the mapper."""
        cart.add_prg_ram(cls.PRG_RAM_SIZE)
        pxrom = cls(
            cart.mirroring,
            MemBanks(0x0000, 0x1FFF, len(cart.chr_rom), cls.CHR_ROM_WINDOW),
            MemBanks(0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_WINDOW),
        )
        last = pxrom.prg_rom_banks.last()
        pxrom.prg_rom_banks.set(1, last - 2)
        pxrom.prg_rom_banks.set(2, last - 1)
        pxrom.prg_rom_banks.set(3, last)
        return pxrom

    def _update_banks(self) -> None:
        self.chr_banks.set(0, self.latch_banks[self.latch[0]])
        self.chr_banks.set(1, self.latch_banks[self.latch[1] + 2])

    def map_read(self, addr: int) -> MappedRead:
        val = self.map_peek(addr)
        if (
            addr in (0x0FD8, 0x0FE8)
            or 0x1FD8 <= addr <= 0x1FDF
            or 0x1FE8 <= addr <= 0x1FEF
        ):
            self.latch[addr >> 12] = ((addr >> 4) & 0xFF) - 0xFD
            self._update_banks()
        return val

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr,
            chr_map=self.chr_banks.translate,
            prg_ram_map=self._prg_ram_8k,
            prg_rom_map=self.prg_rom_banks.translate,
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(
            addr, val, prg_ram_map=self._prg_ram_8k, registers=self._write_register
        )

    def _write_register(self, addr: int, val: int) -> None:
        if 0xA000 <= addr <= 0xAFFF:
            self.prg_rom_banks.set(0, val & 0x0F)
        elif 0xB000 <= addr <= 0xEFFF:
            self.latch_banks[(addr - 0xB000) >> 12] = val & 0x1F
            self._update_banks()
        elif addr >= 0xF000:
            if val & self.MIRRORING_MASK:
                self.mirroring = Mirroring.HORIZONTAL
            else:
                self.mirroring = Mirroring.VERTICAL

    def reset(self, kind: ResetKind) -> None:
        self.latch = [0, 0]
        self.latch_banks = [0, 0, 0, 0]
        self._update_banks()