import pytest

from nesboards.mapping import Cart, Mirroring, ReadTarget, ResetKind, WriteTarget
from nesboards.pxrom import Pxrom

PRG_BANK = 0x2000
CHR_BANK = 0x1000
PRG_BANKS = 16


@pytest.fixture
def loaded():
    prg_rom = b"".join(bytes([i]) * PRG_BANK for i in range(PRG_BANKS))
    chr_rom = b"".join(bytes([i]) * CHR_BANK for i in range(32))
    cart = Cart(prg_rom=prg_rom, chr_rom=chr_rom, mirroring=Mirroring.VERTICAL)
    return Pxrom.load(cart), cart


def prg_at(mapper, cart, addr):
    return cart.prg_rom[mapper.map_peek(addr).value]


def chr_of(cart, result):
    return cart.chr_rom[result.value]


def test_load_fixes_last_three_banks(loaded):
    mapper, cart = loaded
    assert len(cart.prg_ram) == Pxrom.PRG_RAM_SIZE
    assert prg_at(mapper, cart, 0xA000) == PRG_BANKS - 3
    assert prg_at(mapper, cart, 0xC000) == PRG_BANKS - 2
    assert prg_at(mapper, cart, 0xE000) == PRG_BANKS - 1
    assert mapper.map_peek(0xFFFF).value == len(cart.prg_rom) - 1


@pytest.mark.parametrize("val, bank", [(5, 5), (0x15, 5), (0x0F, 15)])
def test_prg_bank_select(loaded, val, bank):
    mapper, cart = loaded
    mapper.map_write(0xA000, val)
    assert prg_at(mapper, cart, 0x8000) == bank
    assert prg_at(mapper, cart, 0xE000) == PRG_BANKS - 1


@pytest.mark.parametrize(
    "val, mirroring", [(0, Mirroring.VERTICAL), (1, Mirroring.HORIZONTAL)]
)
def test_mirroring_register(loaded, val, mirroring):
    mapper, _ = loaded
    mapper.map_write(0xF000, val ^ 1)
    mapper.map_write(0xF000, val)
    assert mapper.mirroring is mirroring


def test_lower_latch_switches_on_tile_reads(loaded):
    mapper, cart = loaded
    mapper.map_write(0xB000, 4)
    mapper.map_write(0xC000, 7)
    assert chr_of(cart, mapper.map_peek(0x0000)) == 4
    before = mapper.map_read(0x0FE8)
    assert chr_of(cart, before) == 4
    assert chr_of(cart, mapper.map_peek(0x0000)) == 7
    mapper.map_read(0x0FD8)
    assert chr_of(cart, mapper.map_peek(0x0000)) == 4


def test_upper_latch_switches_on_tile_range(loaded):
    mapper, cart = loaded
    mapper.map_write(0xD000, 9)
    mapper.map_write(0xE000, 11)
    assert chr_of(cart, mapper.map_peek(0x1000)) == 9
    mapper.map_read(0x1FEF)
    assert chr_of(cart, mapper.map_peek(0x1000)) == 11
    mapper.map_read(0x1FD8)
    assert chr_of(cart, mapper.map_peek(0x1000)) == 9


def test_peek_does_not_move_latch(loaded):
    mapper, cart = loaded
    mapper.map_write(0xB000, 4)
    mapper.map_write(0xC000, 7)
    mapper.map_peek(0x0FE8)
    assert chr_of(cart, mapper.map_peek(0x0000)) == 4
    mapper.map_read(0x0FE0)
    assert chr_of(cart, mapper.map_peek(0x0000)) == 4


def test_latch_bank_masks_to_five_bits(loaded):
    mapper, cart = loaded
    mapper.map_write(0xB000, 0x24)
    assert chr_of(cart, mapper.map_peek(0x0000)) == 0x24 & 0x1F


def test_reset_clears_latches(loaded):
    mapper, cart = loaded
    mapper.map_write(0xB000, 4)
    mapper.map_write(0xE000, 11)
    mapper.map_read(0x1FE8)
    mapper.reset(ResetKind.SOFT)
    assert mapper.latch == [0, 0]
    assert chr_of(cart, mapper.map_peek(0x0000)) == 0
    assert chr_of(cart, mapper.map_peek(0x1000)) == 0


def test_prg_ram_access(loaded):
    mapper, _ = loaded
    read = mapper.map_peek(0x6123)
    assert read.target is ReadTarget.PRG_RAM
    assert read.value == 0x0123
    write = mapper.map_write(0x7000, 0x55)
    assert write.target is WriteTarget.PRG_RAM
    assert write.value == 0x55


def test_unmapped_addresses(loaded):
    mapper, _ = loaded
    assert mapper.map_peek(0x4020).target is ReadTarget.NONE
    assert mapper.map_write(0x9000, 1).target is WriteTarget.NONE