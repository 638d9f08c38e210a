import pytest

from nesboards.mapping import (
    Cart,
    Mapper,
    MappedRead,
    MappedWrite,
    Mirroring,
    ReadTarget,
    WriteTarget,
)
from nesboards.mem import RamState


class _Flat(Mapper):
    def __init__(self):
        self.mirroring = Mirroring.VERTICAL

    def map_peek(self, addr):
        return MappedRead(ReadTarget.DATA, addr & 0xFF)

    def map_write(self, addr, val):
        return MappedWrite(WriteTarget.NONE)


def test_empty_cart_has_no_memories():
    cart = Cart()
    assert not cart.has_chr()
    assert not cart.has_prg_ram()
    assert cart.chr_len() == 0


def test_add_chr_ram_sets_length():
    cart = Cart()
    cart.add_chr_ram(0x2000)
    assert cart.has_chr()
    assert cart.chr_len() == 0x2000


def test_chr_len_prefers_rom():
    cart = Cart(chr_rom=bytes(0x4000))
    cart.add_chr_ram(0x2000)
    assert cart.chr_len() == 0x4000


def test_add_prg_ram_uses_ram_state():
    cart = Cart(ram_state=RamState.ALL_ONES)
    cart.add_prg_ram(32)
    assert cart.has_prg_ram()
    assert cart.prg_ram == bytearray(b"\xff" * 32)


def test_add_ex_ram():
    cart = Cart()
    cart.add_ex_ram(0x1000)
    assert cart.ex_ram == bytearray(0x1000)


def test_mapper_read_defaults_to_peek():
    mapper = _Flat()
    assert mapper.map_read(0x1234) == mapper.map_peek(0x1234)
    assert mapper.map_read(0x1234) == MappedRead(ReadTarget.DATA, 0x34)


def test_mapper_defaults():
    mapper = _Flat()
    assert Mapper.irq_pending(mapper) is False
    assert Mapper.clock(mapper) == 0


def test_mapper_is_abstract():
    with pytest.raises(TypeError):
        Mapper()


def test_mapped_results_compare_by_value():
    assert MappedWrite(WriteTarget.CHR, 5, 6) == MappedWrite(WriteTarget.CHR, 5, 6)
    assert MappedRead(ReadTarget.CHR, 5) != MappedRead(ReadTarget.PRG_ROM, 5)