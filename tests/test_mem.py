import pytest

from nesboards.mem import Access, Mem, MemBanks, RamState


class _Ram(Mem):
    def __init__(self):
        self.data = bytearray(0x10000)

    def peek(self, addr, access=Access.READ):
        return self.data[addr]

    def write(self, addr, val, access=Access.WRITE):
        self.data[addr] = val


def test_get_bank():
    size = 128 * 1024
    banks = MemBanks(0x8000, 0xFFFF, size, 0x4000)
    assert banks.get_bank(0x8000) == 0
    assert banks.get_bank(0x9FFF) == 0
    assert banks.get_bank(0xA000) == 0
    assert banks.get_bank(0xBFFF) == 0
    assert banks.get_bank(0xC000) == 1
    assert banks.get_bank(0xDFFF) == 1
    assert banks.get_bank(0xE000) == 1
    assert banks.get_bank(0xFFFF) == 1


def test_bank_translate():
    size = 128 * 1024
    banks = MemBanks(0x8000, 0xFFFF, size, 0x2000)
    assert banks.last() == 15
    assert banks.translate(0x8000) == 0x0000
    banks.set(0, 1)
    assert banks.translate(0x8000) == 0x2000
    banks.set(0, 2)
    assert banks.translate(0x8000) == 0x4000
    banks.set(0, 0)
    assert banks.translate(0x8000) == 0x0000
    banks.set(0, banks.last())
    assert banks.translate(0x8000) == 0x1E000


def test_bank_set_wraps_to_page_count():
    banks = MemBanks(0x8000, 0xFFFF, 128 * 1024, 0x2000)
    banks.set(0, 3)
    expected = banks.translate(0x8000)
    banks.set(0, 3 + 16)
    assert banks.translate(0x8000) == expected


def test_set_range_assigns_consecutive_pages():
    banks = MemBanks(0x8000, 0xFFFF, 128 * 1024, 0x2000)
    banks.set_range(0, 3, 4)
    offsets = [banks.translate(addr) for addr in (0x8000, 0xA000, 0xC000, 0xE000)]
    assert offsets[0] == 4 * 0x2000
    assert all(b - a == 0x2000 for a, b in zip(offsets, offsets[1:]))


def test_small_capacity_has_one_page():
    banks = MemBanks(0x8000, 0xFFFF, 0, 0x4000)
    assert banks.last() == 0
    banks.set(0, 7)
    assert banks.translate(0x8001) == 0x0001


def test_repr_mentions_start():
    banks = MemBanks(0x8000, 0xFFFF, 0x8000, 0x4000)
    assert "0x8000" in repr(banks)


def test_ram_state_parse():
    assert RamState.parse("all_zeros") is RamState.ALL_ZEROS
    assert RamState.parse("all_ones") is RamState.ALL_ONES
    assert RamState.parse("random") is RamState.RANDOM


def test_ram_state_parse_invalid():
    with pytest.raises(ValueError, match="valid options"):
        RamState.parse("nope")


def test_ram_state_from_index():
    assert RamState.from_index(0) is RamState.ALL_ZEROS
    assert RamState.from_index(1) is RamState.ALL_ONES
    assert RamState.from_index(2) is RamState.RANDOM
    assert RamState.from_index(99) is RamState.RANDOM


def test_ram_state_labels():
    assert RamState.ALL_ZEROS.label() == "All $00"
    assert RamState.ALL_ONES.label() == "All $FF"
    assert RamState.RANDOM.label() == "Random"


def test_ram_state_allocate():
    assert RamState.ALL_ZEROS.allocate(16) == bytearray(16)
    assert RamState.ALL_ONES.allocate(16) == bytearray(b"\xff" * 16)
    assert len(RamState.RANDOM.allocate(64)) == 64


def test_ram_state_fill_in_place():
    ram = bytearray(b"\x12" * 8)
    RamState.ALL_ONES.fill(ram)
    assert ram == bytearray(b"\xff" * 8)
    RamState.ALL_ZEROS.fill(ram)
    assert ram == bytearray(8)


def test_read_u16_little_endian_and_wraps():
    ram = _Ram()
    ram.data[0x1000] = 0x34
    ram.data[0x1001] = 0x12
    assert Mem.read_u16(ram, 0x1000, Access.READ) == 0x1234
    ram.data[0xFFFF] = 0xCD
    ram.data[0x0000] = 0xAB
    assert Mem.peek_u16(ram, 0xFFFF, Access.READ) == 0xABCD


def test_write_u16_puts_both_bytes_at_addr():
    ram = _Ram()
    Mem.write_u16(ram, 0x2000, 0xBEEF, Access.WRITE)
    assert ram.data[0x2000] == 0xBE
    assert ram.data[0x2001] == 0x00


def test_read_defaults_to_peek():
    ram = _Ram()
    ram.data[0x10] = 0x42
    assert Mem.read(ram, 0x10, Access.READ) == 0x42