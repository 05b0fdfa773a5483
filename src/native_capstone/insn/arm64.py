"""
ARM64 Instruction Model
=======================

Immutable records for one decoded ARM64 (A64) instruction and its operands.

ARM64 has no CPS or vector-size fields; instead each operand carries a
vector arrangement specifier (`vas`) and an extender (`ext`).

Payload Widths
--------------
    REG                register id (int32)
    IMM, CIMM          signed 64-bit
    MEM                MemOperandArm64
    FP                 float (double precision)
    REG_MRS, REG_MSR   system register id (int32)
    PSTATE             signed 8-bit PSTATE field code
    SYS                unsigned 32-bit operand widened to a Python int
    PREFETCH           signed 8-bit prefetch operation code
    BARRIER            signed 8-bit barrier option code

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional, Union

from .common import (
    IdTuple,
    PayloadRule,
    check_payload,
    common_dict,
    format_listing,
    has_group,
    read_payload,
)
from .constants import (
    NO_VECTOR_INDEX,
    Arm64Extender,
    Arm64OperandType,
    Arm64ShiftType,
    to_int8,
    to_int32,
    to_int64,
    to_uint32,
)


# =============================================================================
# Memory Operand
# =============================================================================

@dataclass(frozen=True)
class MemOperandArm64:
    """
    ARM64 memory reference.

    Attributes:
        base: Base register id (0 when absent)
        index: Index register id (0 when absent)
        disp: Signed 32-bit displacement
    """
    base: int
    index: int
    disp: int

    def to_dict(self) -> dict:
        return {"base": self.base, "index": self.index, "disp": self.disp}


Arm64Payload = Union[int, float, MemOperandArm64, None]

_PAYLOAD_RULES: dict[Arm64OperandType, PayloadRule] = {
    Arm64OperandType.REG: (int, to_int32),
    Arm64OperandType.IMM: (int, to_int64),
    Arm64OperandType.MEM: (MemOperandArm64, None),
    Arm64OperandType.FP: (float, None),
    Arm64OperandType.CIMM: (int, to_int64),
    Arm64OperandType.REG_MRS: (int, to_int32),
    Arm64OperandType.REG_MSR: (int, to_int32),
    Arm64OperandType.PSTATE: (int, to_int8),
    Arm64OperandType.SYS: (int, to_uint32),
    Arm64OperandType.PREFETCH: (int, to_int8),
    Arm64OperandType.BARRIER: (int, to_int8),
}


# =============================================================================
# Operand
# =============================================================================

@dataclass(frozen=True)
class OperandArm64:
    """
    One ARM64 operand.

    Attributes:
        type: Operand kind (discriminant)
        value: Kind-specific payload, None for INVALID
        vector_index: Vector lane index, -1 when not a vector element
        vas: Vector arrangement specifier code
        shift_type: Shift applied to the operand
        shift_value: Shift amount
        ext: Extender applied to the operand
    """
    type: Arm64OperandType
    value: Arm64Payload = None
    vector_index: int = NO_VECTOR_INDEX
    vas: int = 0
    shift_type: Arm64ShiftType = Arm64ShiftType.INVALID
    shift_value: int = 0
    ext: Arm64Extender = Arm64Extender.INVALID

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", Arm64OperandType(self.type))
        object.__setattr__(self, "shift_type", Arm64ShiftType(self.shift_type))
        object.__setattr__(self, "ext", Arm64Extender(self.ext))
        check_payload(self.type, self.value, _PAYLOAD_RULES)

    def is_kind(self, kind: Arm64OperandType) -> bool:
        return self.type == kind

    @property
    def reg(self) -> int:
        return read_payload(self.type, Arm64OperandType.REG, self.value)

    @property
    def imm(self) -> int:
        return read_payload(self.type, Arm64OperandType.IMM, self.value)

    @property
    def mem(self) -> MemOperandArm64:
        return read_payload(self.type, Arm64OperandType.MEM, self.value)

    @property
    def fp(self) -> float:
        return read_payload(self.type, Arm64OperandType.FP, self.value)

    @property
    def cimm(self) -> int:
        return read_payload(self.type, Arm64OperandType.CIMM, self.value)

    @property
    def reg_mrs(self) -> int:
        return read_payload(self.type, Arm64OperandType.REG_MRS, self.value)

    @property
    def reg_msr(self) -> int:
        return read_payload(self.type, Arm64OperandType.REG_MSR, self.value)

    @property
    def pstate(self) -> int:
        return read_payload(self.type, Arm64OperandType.PSTATE, self.value)

    @property
    def sys(self) -> int:
        """System instruction operand, unsigned 32-bit."""
        return read_payload(self.type, Arm64OperandType.SYS, self.value)

    @property
    def prefetch(self) -> int:
        return read_payload(self.type, Arm64OperandType.PREFETCH, self.value)

    @property
    def barrier(self) -> int:
        return read_payload(self.type, Arm64OperandType.BARRIER, self.value)

    def to_dict(self) -> dict:
        value = self.value.to_dict() if isinstance(self.value, MemOperandArm64) else self.value
        return {
            "type": self.type.name,
            "value": value,
            "vector_index": self.vector_index,
            "vas": self.vas,
            "shift_type": self.shift_type.name,
            "shift_value": self.shift_value,
            "ext": self.ext.name,
        }


# =============================================================================
# Instruction
# =============================================================================

@dataclass(frozen=True)
class InsnArm64:
    """
    One decoded ARM64 instruction.

    Shared fields are described by ArmInstruction. ARM64 adds:

    Attributes:
        cc: Condition code
        update_flags: True if the instruction updates NZCV
        writeback: True if base register writeback is required
    """
    mnemonic: str
    op_str: str
    id: int
    size: int
    address: int
    regs_read: IdTuple
    regs_write: IdTuple
    groups: IdTuple
    operands: tuple[OperandArm64, ...]
    raw_bytes: bytes = b""
    cc: int = 0
    update_flags: bool = False
    writeback: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "operands", tuple(self.operands))

    def in_group(self, group: int) -> bool:
        return has_group(self.groups, group)

    def operand(self, index: int) -> Optional[OperandArm64]:
        """Return the operand at index, or None if out of range."""
        if 0 <= index < len(self.operands):
            return self.operands[index]
        return None

    def __str__(self) -> str:
        return format_listing(self)

    def to_dict(self) -> dict:
        result = common_dict(self)
        result.update({
            "cc": self.cc,
            "update_flags": self.update_flags,
            "writeback": self.writeback,
            "operands": [op.to_dict() for op in self.operands],
        })
        return result
