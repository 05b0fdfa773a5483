"""
Engine Handle Module
====================

Lifecycle-managed access to the native Capstone engine:

- **Capstone**: the engine handle (open/close, disassemble, name lookups)
- **NameResolver**: id-to-name lookups bound to a handle
- **Arm32Writer / Arm64Writer**: engine output to instruction model

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from .capstone import MAX_ADDRESS, UNBOUNDED, Capstone, HandleState
from .names import NameResolver
from .writer import Arm32Writer, Arm64Writer, InstructionWriter, create_writer

__all__ = [
    "Capstone",
    "HandleState",
    "NameResolver",
    "InstructionWriter",
    "Arm32Writer",
    "Arm64Writer",
    "create_writer",
    "MAX_ADDRESS",
    "UNBOUNDED",
]
