"""
Instruction Model
=================

Typed, immutable records for decoded ARM32 and ARM64 instructions:

- **InsnArm32 / InsnArm64**: one decoded instruction per architecture
- **OperandArm32 / OperandArm64**: tagged-union operands with kind-checked
  accessors
- **MemOperandArm32 / MemOperandArm64**: memory reference payloads
- **CapstoneResult**: the read-only sequence returned by one decode call

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from .arm32 import InsnArm32, MemOperandArm32, OperandArm32
from .arm64 import InsnArm64, MemOperandArm64, OperandArm64
from .common import ArmInstruction
from .constants import (
    NO_VECTOR_INDEX,
    Arm32OperandType,
    Arm32ShiftType,
    Arm64Extender,
    Arm64OperandType,
    Arm64ShiftType,
    InsnGroup,
)
from .result import CapstoneResult

__all__ = [
    "ArmInstruction",
    "InsnArm32",
    "InsnArm64",
    "OperandArm32",
    "OperandArm64",
    "MemOperandArm32",
    "MemOperandArm64",
    "CapstoneResult",
    "InsnGroup",
    "Arm32OperandType",
    "Arm64OperandType",
    "Arm32ShiftType",
    "Arm64ShiftType",
    "Arm64Extender",
    "NO_VECTOR_INDEX",
]
