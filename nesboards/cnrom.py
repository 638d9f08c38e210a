"""CNROM board (mapper 003)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from nesboards.mapping import Cart, MappedRead, MappedWrite, Mapper, Mirroring
from nesboards.mem import MemBanks


@dataclass(eq=False)
class Cnrom(Mapper):
    """Switchable 8K CHR-ROM bank with fixed PRG-ROM."""

    CHR_ROM_WINDOW: ClassVar[int] = 8 * 1024

    mirroring: Mirroring
    chr_banks: MemBanks
    mirror_prg_rom: bool

    @classmethod
    def load(cls, cart: Cart) -> Cnrom:
        """Build the mapper for `cart`."""
        return cls(
            cart.mirroring,
            MemBanks(0x0000, 0x1FFFF, len(cart.chr_rom), cls.CHR_ROM_WINDOW),
            len(cart.prg_rom) <= 0x4000,
        )

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr,
            chr_map=self.chr_banks.translate,
            prg_rom_map=self._fixed_prg_rom(self.mirror_prg_rom),
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(addr, val, registers=self._select_bank)

    def _select_bank(self, addr: int, val: int) -> None:
        self.chr_banks.set(0, val)