"""UxROM board (mapper 002)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from nesboards.mapping import Cart, MappedRead, MappedWrite, Mapper, Mirroring
from nesboards.mem import MemBanks


@dataclass(eq=False)
class Uxrom(Mapper):
    """Switchable 16K PRG-ROM bank at $8000 with the last bank fixed at $C000."""

    PRG_ROM_WINDOW: ClassVar[int] = 16 * 1024
    CHR_RAM_SIZE: ClassVar[int] = 8 * 1024

    mirroring: Mirroring
    prg_rom_banks: MemBanks

    @classmethod
    def load(cls, cart: Cart) -> Uxrom:
        """Attach board memories to `cart` and build the mapper."""
        if not cart.has_chr():
            cart.add_chr_ram(cls.CHR_RAM_SIZE)
        banks = MemBanks(0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_ROM_WINDOW)
        banks.set(1, banks.last())
        return cls(cart.mirroring, banks)

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr, chr_map=self._direct, prg_rom_map=self.prg_rom_banks.translate
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(
            addr, val, chr_map=self._direct, registers=self._select_bank
        )

    def _select_bank(self, addr: int, val: int) -> None:
        self.prg_rom_banks.set(0, val)