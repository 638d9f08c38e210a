"""NROM board (mapper 000)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from nesboards.mapping import Cart, MappedRead, MappedWrite, Mapper, Mirroring


@dataclass(eq=False)
class Nrom(Mapper):
    """Fixed 16K or 32K PRG-ROM with 8K CHR and optional PRG-RAM."""

    PRG_RAM_SIZE: ClassVar[int] = 8 * 1024
    CHR_RAM_SIZE: ClassVar[int] = 8 * 1024

    mirroring: Mirroring
    mirror_prg_rom: bool

    @classmethod
    def load(cls, cart: Cart) -> Nrom:
        """Attach board memories to `cart` and build the mapper."""
        # Family Basic had 2-4K of PRG-RAM; 8K is provided by default.
        cart.add_prg_ram(cls.PRG_RAM_SIZE)
        # Homebrew often pairs this board with CHR-RAM.
        if not cart.has_chr():
            cart.add_chr_ram(cls.CHR_RAM_SIZE)
        return cls(cart.mirroring, len(cart.prg_rom) <= 0x4000)

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr,
            chr_map=self._direct,
            prg_ram_map=self._prg_ram_8k,
            prg_rom_map=self._fixed_prg_rom(self.mirror_prg_rom),
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(
            addr, val, chr_map=self._direct, prg_ram_map=self._prg_ram_8k
        )