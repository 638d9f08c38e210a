"""NES cartridge board logic: bank switching, mirroring, IRQ counters and expansion audio."""

__version__ = "0.1.0"

__all__ = [
    "axrom",
    "bf909x",
    "cnrom",
    "gxrom",
    "mapping",
    "mem",
    "nrom",
    "pxrom",
    "sxrom",
    "txrom",
    "uxrom",
    "vrc6",
    "vrc_irq",
]