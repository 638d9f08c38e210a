import pytest

from nesboards.mapping import Cart, MappedRead, MappedWrite, ReadTarget, WriteTarget
from nesboards.uxrom import Uxrom

BANKS = 8


def _banked(count, size):
    return b"".join(bytes([index]) * size for index in range(count))


@pytest.fixture
def setup():
    cart = Cart(prg_rom=_banked(BANKS, 0x4000))
    return cart, Uxrom.load(cart)


def test_load_adds_chr_ram(setup):
    cart, _ = setup
    assert cart.chr_len() == Uxrom.CHR_RAM_SIZE


def test_initial_banks(setup):
    cart, uxrom = setup
    assert cart.prg_rom[uxrom.map_peek(0x8000).value] == 0
    assert cart.prg_rom[uxrom.map_peek(0xC000).value] == BANKS - 1


@pytest.mark.parametrize("bank", [1, 3, 6])
def test_bank_switch(setup, bank):
    cart, uxrom = setup
    assert uxrom.map_write(0x8000, bank) == MappedWrite(WriteTarget.NONE)
    assert cart.prg_rom[uxrom.map_peek(0x9000).value] == bank
    assert cart.prg_rom[uxrom.map_peek(0xF000).value] == BANKS - 1


def test_chr_passthrough(setup):
    _, uxrom = setup
    assert uxrom.map_peek(0x1234) == MappedRead(ReadTarget.CHR, 0x1234)
    assert uxrom.map_write(0x1234, 0x56) == MappedWrite(WriteTarget.CHR, 0x1234, 0x56)


def test_prg_ram_not_mapped(setup):
    _, uxrom = setup
    assert uxrom.map_peek(0x6000) == MappedRead(ReadTarget.NONE)