"""AxROM board (mapper 007)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from nesboards.mapping import Cart, MappedRead, MappedWrite, Mapper, Mirroring
from nesboards.mem import MemBanks


@dataclass(eq=False)
class Axrom(Mapper):
    """Switchable 32K PRG-ROM bank with single-screen mirroring select."""

    PRG_ROM_WINDOW: ClassVar[int] = 32 * 1024
    CHR_RAM_SIZE: ClassVar[int] = 8 * 1024
    SINGLE_SCREEN_B: ClassVar[int] = 0x10

    mirroring: Mirroring
    prg_rom_banks: MemBanks

    @classmethod
    def load(cls, cart: Cart) -> Axrom:
        """Attach board memories to `cart` and build the mapper."""
        if not cart.has_chr():
            cart.add_chr_ram(cls.CHR_RAM_SIZE)
        return cls(
            cart.mirroring,
            MemBanks(0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_ROM_WINDOW),
        )

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr, chr_map=self._direct, prg_rom_map=self.prg_rom_banks.translate
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        return self._route_write(
            addr, val, chr_map=self._direct, registers=self._write_register
        )

    def _write_register(self, addr: int, val: int) -> None:
        self.prg_rom_banks.set(0, val & 0x0F)
        if val & self.SINGLE_SCREEN_B == self.SINGLE_SCREEN_B:
            self.mirroring = Mirroring.SINGLE_SCREEN_B
        else:
            self.mirroring = Mirroring.SINGLE_SCREEN_A