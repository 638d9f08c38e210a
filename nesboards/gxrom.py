"""GxROM board (mapper 066)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from nesboards.mapping import Cart, MappedRead, MappedWrite, Mapper, Mirroring
from nesboards.mem import MemBanks


@dataclass(eq=False)
class Gxrom(Mapper):
    """Switchable 32K PRG-ROM and 8K CHR-ROM banks selected by one register."""

    PRG_ROM_WINDOW: ClassVar[int] = 32 * 1024
    CHR_WINDOW: ClassVar[int] = 8 * 1024
    CHR_BANK_MASK: ClassVar[int] = 0x0F
    PRG_BANK_MASK: ClassVar[int] = 0x30

    mirroring: Mirroring
    chr_banks: MemBanks
    prg_rom_banks: MemBanks

    @classmethod
    def load(cls, cart: Cart) -> Gxrom:
        """Build the mapper for `cart`."""
        return cls(
            cart.mirroring,
            MemBanks(0x0000, 0x1FFF, len(cart.chr_rom), cls.CHR_WINDOW),
            MemBanks(0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_ROM_WINDOW),
        )

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr,
            chr_map=self.chr_banks.translate,
            prg_rom_map=self.prg_rom_banks.translate,
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(addr, val, registers=self._select_banks)

    def _select_banks(self, addr: int, val: int) -> None:
        self.chr_banks.set(0, val & self.CHR_BANK_MASK)
        self.prg_rom_banks.set(0, (val & self.PRG_BANK_MASK) >> 4)