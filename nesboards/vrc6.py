"""VRC6 board (mappers 024 and 026) with its expansion audio."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar

from nesboards.mapping import (
    Cart,
    MappedRead,
    MappedWrite,
    Mapper,
    Mirroring,
    ReadTarget,
    ResetKind,
    WriteTarget,
)
from nesboards.mem import MemBanks
from nesboards.vrc_irq import VrcIrq

# Loudest entry of the console's pulse mixing table, 95.52 / (8128 / n + 100) at n = 30.
_PULSE_TABLE_MAX = 95.52 / (8128.0 / 30 + 100.0)
_PULSE_SCALE = _PULSE_TABLE_MAX / 15.0


class Vrc6Revision(enum.Enum):
    """Board revision; B swaps the A0 and A1 register lines."""

    A = "a"
    B = "b"


def _freq_write(frequency: int, reg: int, val: int) -> int:
    if reg == 1:
        return (frequency & 0x0F00) | (val & 0xFF)
    return ((val & 0x0F) << 8) | (frequency & 0xFF)


@dataclass
class Vrc6Pulse:
    """Pulse channel with 16-step duty cycle and 4-bit volume."""

    enabled: bool = False
    level: int = 0
    duty_cycle: int = 0
    ignore_duty: bool = False
    frequency: int = 1
    timer: int = 1
    step: int = 0
    freq_shift: int = 0

    def write_register(self, addr: int, val: int) -> None:
        """Write one of the channel's three registers, selected by A0/A1."""
        reg = addr & 0x03
        if reg == 0:
            self.level = val & 0x0F
            self.duty_cycle = (val & 0x70) >> 4
            self.ignore_duty = val & 0x80 == 0x80
        elif reg in (1, 2):
            self.frequency = _freq_write(self.frequency, reg, val)
            if reg == 2:
                self.enabled = val & 0x80 == 0x80
                if not self.enabled:
                    self.step = 0
        else:
            raise ValueError(f"impossible Vrc6Pulse register: {addr}")

    def set_freq_shift(self, val: int) -> None:
        """Set how far the period is shifted right."""
        self.freq_shift = val

    def volume(self) -> float:
        """Current output level."""
        if self.enabled and (self.ignore_duty or self.step <= self.duty_cycle):
            return float(self.level)
        return 0.0

    def clock(self) -> int:
        """Advance the timer; returns 1 when the duty step advanced."""
        if self.enabled:
            self.timer -= 1
            if self.timer == 0:
                self.step = (self.step + 1) & 0x0F
                self.timer = (self.frequency >> self.freq_shift) + 1
                return 1
        return 0


@dataclass
class Vrc6Saw:
    """Sawtooth channel driven by an accumulator."""

    enabled: bool = False
    accum: int = 0
    accum_rate: int = 0
    frequency: int = 1
    timer: int = 1
    step: int = 0
    freq_shift: int = 0

    def write_register(self, addr: int, val: int) -> None:
        """Write one of the channel's three registers, selected by A0/A1."""
        reg = addr & 0x03
        if reg == 0:
            self.accum_rate = val & 0x3F
        elif reg in (1, 2):
            self.frequency = _freq_write(self.frequency, reg, val)
            if reg == 2:
                self.enabled = val & 0x80 == 0x80
                if not self.enabled:
                    self.accum = 0
                    self.step = 0
        else:
            raise ValueError(f"impossible Vrc6Saw register: {addr}")

    def set_freq_shift(self, val: int) -> None:
        """Set how far the period is shifted right."""
        self.freq_shift = val

    def volume(self) -> float:
        """Current output level: the top five bits of the accumulator."""
        return float(self.accum >> 3) if self.enabled else 0.0

    def clock(self) -> int:
        """Advance the timer; returns 1 when the step advanced."""
        if self.enabled:
            self.timer -= 1
            if self.timer == 0:
                self.step = (self.step + 1) % 14
                self.timer = (self.frequency >> self.freq_shift) + 1
                if self.step == 0:
                    self.accum = 0
                elif self.step & 0x01 == 0:
                    self.accum = (self.accum + self.accum_rate) & 0xFF
                return 1
        return 0


@dataclass
class Vrc6Audio:
    """Two pulse channels and a sawtooth, mixed together."""

    pulse1: Vrc6Pulse = field(default_factory=Vrc6Pulse)
    pulse2: Vrc6Pulse = field(default_factory=Vrc6Pulse)
    saw: Vrc6Saw = field(default_factory=Vrc6Saw)
    halt: bool = False
    out: float = 0.0
    last_out: float = 0.0

    def mix(self) -> float:
        """Mixed output on the console's pulse scale."""
        return _PULSE_SCALE * self.out

    def write_register(self, addr: int, val: int) -> None:
        """Write an audio register at $9000-$9003, $A000-$A002 or $B000-$B002."""
        reg = addr & 0xF003
        if 0x9000 <= reg <= 0x9002:
            self.pulse1.write_register(addr, val)
        elif reg == 0x9003:
            self.halt = val & 0x01 == 0x01
            if val & 0x04:
                shift = 8
            elif val & 0x02:
                shift = 4
            else:
                shift = 0
            for channel in (self.pulse1, self.pulse2, self.saw):
                channel.set_freq_shift(shift)
        elif 0xA000 <= reg <= 0xA002:
            self.pulse2.write_register(addr, val)
        elif 0xB000 <= reg <= 0xB002:
            self.saw.write_register(addr, val)
        else:
            raise ValueError(f"impossible Vrc6Audio register: {addr}")

    def clock(self) -> int:
        """Advance all channels unless halted."""
        if not self.halt:
            self.pulse1.clock()
            self.pulse2.clock()
            self.saw.clock()
            self.out = self.pulse1.volume() + self.pulse2.volume() + self.saw.volume()
        return 1

    def reset(self, kind: ResetKind) -> None:
        """Clear the halt flag and the last output."""
        self.last_out = 0.0
        self.halt = False


@dataclass
class _Vrc6Regs:
    banking_mode: int = 0
    prg: list[int] = field(default_factory=lambda: [0] * 4)
    chr: list[int] = field(default_factory=lambda: [0] * 8)


_CIRAM_MIRRORING = {
    0x20: Mirroring.VERTICAL,
    0x27: Mirroring.VERTICAL,
    0x23: Mirroring.HORIZONTAL,
    0x24: Mirroring.HORIZONTAL,
    0x28: Mirroring.SINGLE_SCREEN_A,
    0x2F: Mirroring.SINGLE_SCREEN_A,
    0x2B: Mirroring.SINGLE_SCREEN_B,
    0x2C: Mirroring.SINGLE_SCREEN_B,
}

_NAMETABLE_LAYOUTS = {
    Mirroring.VERTICAL: [0, 1, 0, 1],
    Mirroring.HORIZONTAL: [0, 0, 1, 1],
    Mirroring.SINGLE_SCREEN_A: [0, 0, 0, 0],
    Mirroring.SINGLE_SCREEN_B: [1, 1, 1, 1],
    Mirroring.FOUR_SCREEN: [0, 1, 2, 3],
}


@dataclass(eq=False)
class Vrc6(Mapper):
    """Konami VRC6 with 1K CHR banks, switchable nametables, IRQ and audio."""

    PRG_RAM_SIZE: ClassVar[int] = 8 * 1024
    PRG_WINDOW: ClassVar[int] = 8 * 1024
    CHR_WINDOW: ClassVar[int] = 1024

    revision: Vrc6Revision
    mirroring: Mirroring
    chr_banks: MemBanks
    prg_ram_banks: MemBanks
    prg_rom_banks: MemBanks
    regs: _Vrc6Regs = field(default_factory=_Vrc6Regs)
    irq: VrcIrq = field(default_factory=VrcIrq)
    audio: Vrc6Audio = field(default_factory=Vrc6Audio)
    nt_banks: list[int] = field(default_factory=lambda: [0] * 4)

    @classmethod
    def load(cls, cart: Cart, revision: Vrc6Revision) -> Vrc6:
        """Attach board memories to `cart` and build the mapper."""
        if not cart.has_prg_ram():
            cart.add_prg_ram(cls.PRG_RAM_SIZE)
        vrc6 = cls(
            revision=revision,
            mirroring=cart.mirroring,
            chr_banks=MemBanks(0x0000, 0x1FFF, len(cart.chr_rom), cls.CHR_WINDOW),
            prg_ram_banks=MemBanks(
                0x6000, 0x7FFF, len(cart.prg_ram), cls.PRG_RAM_SIZE
            ),
            prg_rom_banks=MemBanks(
                0x8000, 0xFFFF, len(cart.prg_rom), cls.PRG_WINDOW
            ),
        )
        vrc6.prg_rom_banks.set(3, vrc6.prg_rom_banks.last())
        return vrc6

    def prg_ram_enabled(self) -> bool:
        """Whether the PRG-RAM enable bit of the banking mode is set."""
        return self.regs.banking_mode & 0x80 == 0x80

    def apply_mirroring(self, mirroring: Mirroring) -> None:
        """Set the mirroring and the nametable pages that go with it."""
        self.mirroring = mirroring
        self.nt_banks = list(_NAMETABLE_LAYOUTS[mirroring])

    def _nametable_pages(self, mask: int) -> list[int]:
        c = self.regs.chr
        low = self.regs.banking_mode & 0x07
        if low in (0, 6, 7):
            pages = [c[6], c[6], c[7], c[7]]
        elif low in (1, 5):
            pages = [c[4], c[5], c[6], c[7]]
        else:
            pages = [c[6], c[7], c[6], c[7]]
        return [page & mask for page in pages]

    def _update_chr_banks(self) -> None:
        mode = self.regs.banking_mode
        c = self.regs.chr
        mask, or_mask = (0xFE, 1) if mode & 0x20 == 0x20 else (0xFF, 0)

        def pair(value: int) -> list[int]:
            return [value & mask, (value & mask) | or_mask]

        low = mode & 0x03
        if low == 0:
            pages = list(c)
        elif low == 1:
            pages = [page for value in c[:4] for page in pair(value)]
        else:
            pages = list(c[:4]) + pair(c[4]) + pair(c[5])
        for slot, page in enumerate(pages):
            self.chr_banks.set(slot, page)

        select = mode & 0x2F
        if mode & 0x10 == 0x10:
            # Nametables come from CHR-ROM.
            self.apply_mirroring(Mirroring.FOUR_SCREEN)
            lo6, lo7 = c[6] & 0xFE, c[7] & 0xFE
            if select in (0x20, 0x27):
                self.nt_banks = [lo6, lo6 | 1, lo7, lo7 | 1]
            elif select in (0x23, 0x24):
                self.nt_banks = [lo6, lo7, lo6 | 1, lo7 | 1]
            elif select in (0x28, 0x2F):
                self.nt_banks = [lo6, lo6, lo7, lo7]
            elif select in (0x2B, 0x2C):
                self.nt_banks = [lo6 | 1, lo7 | 1, lo6 | 1, lo7 | 1]
            else:
                self.nt_banks = self._nametable_pages(0xFF)
        elif select in _CIRAM_MIRRORING:
            self.apply_mirroring(_CIRAM_MIRRORING[select])
        else:
            self.apply_mirroring(Mirroring.FOUR_SCREEN)
            self.nt_banks = self._nametable_pages(0x01)

    def irq_pending(self) -> bool:
        return self.irq.pending()

    def map_peek(self, addr: int) -> MappedRead:
        if 0x0000 <= addr <= 0x1FFF:
            return MappedRead(ReadTarget.CHR, self.chr_banks.translate(addr))
        if 0x2000 <= addr <= 0x3EFF:
            offset = addr - 0x2000
            a10 = (self.nt_banks[(offset >> 10) & 0x03] << 10) & 0xFFFF
            offset = a10 | (~a10 & 0xFFFF & offset)
            if self.regs.banking_mode & 0x10 == 0:
                return MappedRead(ReadTarget.CIRAM, offset)
            return MappedRead(ReadTarget.CHR, self.chr_banks.translate(offset))
        if 0x6000 <= addr <= 0x7FFF and self.prg_ram_enabled():
            return MappedRead(ReadTarget.PRG_RAM, self.prg_ram_banks.translate(addr))
        if 0x8000 <= addr <= 0xFFFF:
            return MappedRead(ReadTarget.PRG_ROM, self.prg_rom_banks.translate(addr))
        return MappedRead(ReadTarget.NONE)

    def map_write(self, addr: int, val: int) -> MappedWrite:
        if self.prg_ram_enabled() and 0x6000 <= addr <= 0x7FFF:
            return MappedWrite(
                WriteTarget.PRG_RAM, self.prg_ram_banks.translate(addr), val
            )

        if self.revision is Vrc6Revision.B:
            addr = (addr & 0xFFFC) | ((addr & 0x01) << 1) | ((addr & 0x02) >> 1)

        # Only A0, A1 and A12-A15 decode registers; the rest is mirrored.
        reg = addr & 0xF003
        if 0x8000 <= reg <= 0x8003:
            self.prg_rom_banks.set_range(0, 1, (val & 0x0F) << 1)
        elif (
            0x9000 <= reg <= 0x9003
            or 0xA000 <= reg <= 0xA002
            or 0xB000 <= reg <= 0xB002
        ):
            self.audio.write_register(addr, val)
        elif reg == 0xB003:
            self.regs.banking_mode = val
            self._update_chr_banks()
        elif 0xC000 <= reg <= 0xC003:
            self.prg_rom_banks.set(2, val & 0x1F)
        elif 0xD000 <= reg <= 0xD003:
            self.regs.chr[addr & 0x03] = val
            self._update_chr_banks()
        elif 0xE000 <= reg <= 0xE003:
            self.regs.chr[4 + (addr & 0x03)] = val
            self._update_chr_banks()
        elif reg == 0xF000:
            self.irq.write_reload(val)
        elif reg == 0xF001:
            self.irq.write_control(val)
        elif reg == 0xF002:
            self.irq.acknowledge()
        return MappedWrite(WriteTarget.NONE)

    def mix(self) -> float:
        """Expansion audio output."""
        return self.audio.mix()

    def clock(self) -> int:
        self.irq.clock()
        self.audio.clock()
        return 1

    def reset(self, kind: ResetKind) -> None:
        self.irq.reset(kind)
        self.audio.reset(kind)