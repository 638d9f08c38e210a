# nesboards

Cartridge board logic for NES emulation. Each board ("mapper") takes CPU and
PPU bus addresses and decides where they land: PRG-ROM, PRG-RAM, CHR memory,
the console's internal nametable RAM (CIRAM), extra RAM on the cartridge, or a
register inside the board. It is plain address arithmetic and state; the
caller owns the actual memory arrays.

## Boards

| Module               | Class             | iNES mapper |
|----------------------|-------------------|-------------|
| `nesboards.nrom`     | `Nrom`            | 000         |
| `nesboards.sxrom`    | `Sxrom` (MMC1)    | 001         |
| `nesboards.uxrom`    | `Uxrom`           | 002         |
| `nesboards.cnrom`    | `Cnrom`           | 003         |
| `nesboards.txrom`    | `Txrom` (MMC3)    | 004         |
| `nesboards.axrom`    | `Axrom`           | 007         |
| `nesboards.pxrom`    | `Pxrom` (MMC2)    | 009         |
| `nesboards.vrc6`     | `Vrc6`            | 024 / 026   |
| `nesboards.gxrom`    | `Gxrom`           | 066         |
| `nesboards.bf909x`   | `Bf909x`          | 071         |

Every board is built with a `load` class method that takes a `Cart`, adds
whatever RAM the board provides (PRG-RAM, CHR-RAM, four-screen RAM) and returns
the board. A few take an extra argument:

- `Sxrom.load(cart, board)` with an `Mmc1Revision` (`A` or `BC`). On revision
  `A` PRG-RAM is always enabled.
- `Vrc6.load(cart, revision)` with a `Vrc6Revision`; revision `B` swaps the A0
  and A1 register lines.
- `Txrom` starts as `Mmc3Revision.BC`; `set_revision` selects `A` or `ACC`,
  which changes how the scanline IRQ fires.
- `Bf909x` picks `Bf909Revision.BF9097` when `cart.submapper_num` is 1, and
  switches to it on the first write to `$9000`.

Boards that snoop the bus implement `ppu_bus_read`, `ppu_bus_write` or
`cpu_bus_write`; the rest ignore them. `clock()` advances one CPU cycle,
`reset(kind)` takes a `ResetKind` (`SOFT` or `HARD`), and `irq_pending()`
reports the IRQ line.

The supporting modules are:

- `nesboards.mem`: `MemBanks` for windowed bank translation, `RamState` for
  power-on RAM contents, the `Access` kinds and the abstract `Mem` interface
  (byte `peek`/`write`, plus little-endian `read_u16`/`peek_u16`/`write_u16`).
- `nesboards.mapping`: `Cart`, `Mirroring`, `ResetKind`, `ReadTarget` /
  `WriteTarget`, `MappedRead` / `MappedWrite`, and the `Mapper` base class.
- `nesboards.vrc_irq`: `VrcIrq`, the scanline/cycle counter used by `Vrc6`.
- `nesboards.vrc6` also holds the board's expansion audio: `Vrc6Pulse`,
  `Vrc6Saw` and `Vrc6Audio`. `Vrc6.mix()` returns the mixed output level.

## Usage

```python
from nesboards.mapping import Cart
from nesboards.uxrom import Uxrom

cart = Cart(prg_rom=bytes(128 * 1024))   # eight 16K PRG-ROM banks
board = Uxrom.load(cart)                 # adds 8K CHR-RAM since the cart has none

board.map_write(0x8000, 3)               # select bank 3 at $8000-$BFFF
print(board.map_peek(0x8000))            # PRG_ROM, offset 0xC000
print(board.map_peek(0xC000))            # fixed last bank, offset 0x1C000
```

`map_peek` and `map_read` return a `MappedRead` holding a `ReadTarget` and
either an offset into that memory or, for `ReadTarget.DATA`, a literal byte.
`map_read` may change board state (MMC2 latches, MMC3 IRQ clocking);
`map_peek` never does. `map_write` returns a `MappedWrite` naming where the
byte should be stored, or `WriteTarget.NONE` when the write only touched a
board register.

Banking on its own:

```python
from nesboards.mem import MemBanks

banks = MemBanks(0x8000, 0xFFFF, 128 * 1024, 0x2000)
assert banks.last() == 15
banks.set(0, banks.last())
assert banks.translate(0x8000) == 0x1E000
```

Power-on RAM contents:

```python
from nesboards.mem import RamState

ram = RamState.parse("all_ones").allocate(2048)   # 2K of 0xFF
RamState.from_index(2).label()                    # "Random"
```

`RamState.parse` raises `ValueError` for anything but `all_zeros`,
`all_ones` or `random`.

## What it does not do

There is no CPU, PPU or APU here, no ROM file or header parsing, no storage of
save RAM, and no command to run. A `Cart` is built by the caller from PRG and
CHR data it already has; the boards only say where each access goes.

## Tests

```
pip install -e .[test]
pytest
```