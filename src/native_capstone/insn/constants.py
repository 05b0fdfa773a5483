"""
Instruction Model Constants
===========================

Numeric discriminants and enumerations shared by the ARM32 and ARM64
instruction models, plus the fixed-width integer helpers used to keep
payload values inside the width the engine reports them in.

The operand kind numbering is the model's own and is stable: it does not
follow the engine's internal constants (the engine numbers its "extra"
operand kinds from 64 upwards). Shift and extender values match the engine.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import IntEnum


# =============================================================================
# Instruction Groups
# =============================================================================

class InsnGroup(IntEnum):
    """Architecture-independent instruction group ids."""
    INVALID = 0
    JUMP = 1
    CALL = 2
    RET = 3
    INT = 4
    IRET = 5
    PRIVILEGE = 6
    BRANCH_RELATIVE = 7


# =============================================================================
# Operand Kinds
# =============================================================================

class Arm32OperandType(IntEnum):
    """Discriminant of an ARM32 operand."""
    INVALID = 0
    REG = 1
    IMM = 2
    MEM = 3
    FP = 4
    CIMM = 5     # coprocessor immediate
    PIMM = 6     # coprocessor register (p0-p15)
    SETEND = 7
    SYSREG = 8


class Arm64OperandType(IntEnum):
    """Discriminant of an ARM64 operand."""
    INVALID = 0
    REG = 1
    IMM = 2
    MEM = 3
    FP = 4
    CIMM = 5
    REG_MRS = 6
    REG_MSR = 7
    PSTATE = 8
    SYS = 9
    PREFETCH = 10
    BARRIER = 11


# =============================================================================
# Shifts and Extenders
# =============================================================================

class Arm32ShiftType(IntEnum):
    INVALID = 0
    ASR = 1
    LSL = 2
    LSR = 3
    ROR = 4
    RRX = 5
    ASR_REG = 6
    LSL_REG = 7
    LSR_REG = 8
    ROR_REG = 9
    RRX_REG = 10


class Arm64ShiftType(IntEnum):
    INVALID = 0
    LSL = 1
    MSL = 2
    LSR = 3
    ASR = 4
    ROR = 5


class Arm64Extender(IntEnum):
    INVALID = 0
    UXTB = 1
    UXTH = 2
    UXTW = 3
    UXTX = 4
    SXTB = 5
    SXTH = 6
    SXTW = 7
    SXTX = 8


# Vector index reported when an operand has no vector lane
NO_VECTOR_INDEX = -1


# =============================================================================
# Fixed-Width Integer Helpers
# =============================================================================

def _wrap_signed(value: int, bits: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _wrap_unsigned(value: int, bits: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    return value & ((1 << bits) - 1)


def to_int8(value: int) -> int:
    """Wrap to a signed 8-bit value (two's complement)."""
    return _wrap_signed(value, 8)


def to_int16(value: int) -> int:
    """Wrap to a signed 16-bit value (two's complement)."""
    return _wrap_signed(value, 16)


def to_uint16(value: int) -> int:
    """Wrap to an unsigned 16-bit value."""
    return _wrap_unsigned(value, 16)


def to_int32(value: int) -> int:
    """Wrap to a signed 32-bit value (two's complement)."""
    return _wrap_signed(value, 32)


def to_uint32(value: int) -> int:
    """Wrap to an unsigned 32-bit value."""
    return _wrap_unsigned(value, 32)


def to_int64(value: int) -> int:
    """Wrap to a signed 64-bit value (two's complement)."""
    return _wrap_signed(value, 64)


def is_int(value: object) -> bool:
    """True for real ints (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)
