"""Protocol toolkit for Hoymiles micro-inverters: checksums, frames, addresses, payload layouts, settings and clock helpers."""

__version__ = "0.5.17"