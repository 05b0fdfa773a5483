"""
Disassembly Modes
=================

The instruction-set architecture a Capstone handle decodes. The mode is
chosen when the handle is created and never changes afterwards.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import Enum


class CapstoneMode(Enum):
    """Supported architectures."""
    ARM32 = 0
    ARM64 = 1

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_name(cls, name: str) -> "CapstoneMode":
        """
        Parse a mode name (case-insensitive).

        Accepts: arm32, arm, a32 -> ARM32; arm64, aarch64, a64 -> ARM64.

        Raises:
            ValueError: If the name is not recognized
        """
        key = name.strip().lower()
        if key not in _MODE_ALIASES:
            valid = ", ".join(sorted(_MODE_ALIASES))
            raise ValueError(f"unknown mode '{name}' (expected one of: {valid})")
        return _MODE_ALIASES[key]


_MODE_ALIASES: dict[str, CapstoneMode] = {
    "arm32": CapstoneMode.ARM32,
    "arm": CapstoneMode.ARM32,
    "a32": CapstoneMode.ARM32,
    "arm64": CapstoneMode.ARM64,
    "aarch64": CapstoneMode.ARM64,
    "a64": CapstoneMode.ARM64,
}
