"""BF909x board (mapper 071)."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from nesboards.mapping import Cart, MappedRead, MappedWrite, Mapper, Mirroring
from nesboards.mem import MemBanks


class Bf909Revision(enum.Enum):
    """Board variant; BF9097 adds a mirroring register."""

    BF909X = "bf909x"
    BF9097 = "bf9097"


@dataclass(eq=False)
class Bf909x(Mapper):
    """Switchable 16K PRG-ROM bank at $8000 with the last bank fixed at $C000."""

    PRG_ROM_WINDOW: ClassVar[int] = 16 * 1024
    CHR_RAM_SIZE: ClassVar[int] = 8 * 1024
    SINGLE_SCREEN_A: ClassVar[int] = 0x10

    variant: Bf909Revision
    mirroring: Mirroring
    prg_rom_banks: MemBanks

    @classmethod
    def load(cls, cart: Cart) -> Bf909x:
        """Attach board memories to `cart` and build the mapper."""
        if not cart.has_chr():
            cart.add_chr_ram(cls.CHR_RAM_SIZE)
        variant = (
            Bf909Revision.BF9097 if cart.submapper_num == 1 else Bf909Revision.BF909X
        )
        banks = MemBanks(0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_ROM_WINDOW)
        banks.set(1, banks.last())
        return cls(variant, cart.mirroring, banks)

    def map_peek(self, addr: int) -> MappedRead:
        return self._route_read(
            addr, chr_map=self._direct, prg_rom_map=self.prg_rom_banks.translate
        )

    def map_write(self, addr: int, val: int) -> MappedWrite:
        # Firehawk writes $9000 to change mirroring.
        if addr == 0x9000:
            self.variant = Bf909Revision.BF9097
        return self._route_write(
            addr, val, chr_map=self._direct, registers=self._write_register
        )

    def _write_register(self, addr: int, val: int) -> None:
        if addr >= 0xC000 or self.variant is not Bf909Revision.BF9097:
            self.prg_rom_banks.set(0, val)
        elif val & self.SINGLE_SCREEN_A == self.SINGLE_SCREEN_A:
            self.mirroring = Mirroring.SINGLE_SCREEN_A
        else:
            self.mirroring = Mirroring.SINGLE_SCREEN_B