"""
ARM32 Instruction Model
=======================

Immutable records for one decoded ARM32 (A32) instruction and its operands.

Operands are a tagged union: `type` is the discriminant and `value` the
single payload slot. The payload type is checked against the discriminant
at construction time, so an operand whose payload disagrees with its kind
cannot exist. Reading the payload goes through one accessor per kind:

    op = insn.operands[1]
    if op.type == Arm32OperandType.IMM:
        print(op.imm)           # int32
    op.mem                      # InvalidOperandKindError unless op is MEM

Payload Widths
--------------
    REG, SYSREG        register id (int32)
    IMM, CIMM, PIMM    signed 32-bit
    MEM                MemOperandArm32
    FP                 float (double precision)
    SETEND             signed 8-bit (engine setend code)

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
    Arm32OperandType,
    Arm32ShiftType,
    to_int8,
    to_int32,
)


# =============================================================================
# Memory Operand
# =============================================================================

@dataclass(frozen=True)
class MemOperandArm32:
    """
    ARM32 memory reference: [base, index, #disp].

    A subtracted index ([r1, -r2]) is reported through
    OperandArm32.subtracted; scale stays 1 for register indexes.

    Attributes:
        base: Base register id (0 when absent)
        index: Index register id (0 when absent)
        scale: Index scale as reported by the engine
        disp: Signed 32-bit displacement
    """
    base: int
    index: int
    scale: int
    disp: int

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "index": self.index,
            "scale": self.scale,
            "disp": self.disp,
        }


Arm32Payload = Union[int, float, MemOperandArm32, None]

_PAYLOAD_RULES: dict[Arm32OperandType, PayloadRule] = {
    Arm32OperandType.REG: (int, to_int32),
    Arm32OperandType.IMM: (int, to_int32),
    Arm32OperandType.MEM: (MemOperandArm32, None),
    Arm32OperandType.FP: (float, None),
    Arm32OperandType.CIMM: (int, to_int32),
    Arm32OperandType.PIMM: (int, to_int32),
    Arm32OperandType.SETEND: (int, to_int8),
    Arm32OperandType.SYSREG: (int, to_int32),
}


# =============================================================================
# Operand
# =============================================================================

@dataclass(frozen=True)
class OperandArm32:
    """
    One ARM32 operand.

    Attributes:
        type: Operand kind (discriminant)
        value: Kind-specific payload, None for INVALID
        vector_index: Vector lane index, -1 when not a vector element
        subtracted: True if the operand is subtracted from the base
        shift_type: Shift applied to the operand
        shift_value: Shift amount, or register id for *_REG shifts
    """
    type: Arm32OperandType
    value: Arm32Payload = None
    vector_index: int = NO_VECTOR_INDEX
    subtracted: bool = False
    shift_type: Arm32ShiftType = Arm32ShiftType.INVALID
    shift_value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", Arm32OperandType(self.type))
        object.__setattr__(self, "shift_type", Arm32ShiftType(self.shift_type))
        check_payload(self.type, self.value, _PAYLOAD_RULES)

    def is_kind(self, kind: Arm32OperandType) -> bool:
        return self.type == kind

    @property
    def reg(self) -> int:
        return read_payload(self.type, Arm32OperandType.REG, self.value)

    @property
    def imm(self) -> int:
        return read_payload(self.type, Arm32OperandType.IMM, self.value)

    @property
    def mem(self) -> MemOperandArm32:
        return read_payload(self.type, Arm32OperandType.MEM, self.value)

    @property
    def fp(self) -> float:
        return read_payload(self.type, Arm32OperandType.FP, self.value)

    @property
    def cimm(self) -> int:
        return read_payload(self.type, Arm32OperandType.CIMM, self.value)

    @property
    def pimm(self) -> int:
        return read_payload(self.type, Arm32OperandType.PIMM, self.value)

    @property
    def setend(self) -> int:
        return read_payload(self.type, Arm32OperandType.SETEND, self.value)

    @property
    def sysreg(self) -> int:
        return read_payload(self.type, Arm32OperandType.SYSREG, self.value)

    def to_dict(self) -> dict:
        value = self.value.to_dict() if isinstance(self.value, MemOperandArm32) else self.value
        return {
            "type": self.type.name,
            "value": value,
            "vector_index": self.vector_index,
            "subtracted": self.subtracted,
            "shift_type": self.shift_type.name,
            "shift_value": self.shift_value,
        }


# =============================================================================
# Instruction
# =============================================================================

@dataclass(frozen=True)
class InsnArm32:
    """
    One decoded ARM32 instruction.

    Shared fields are described by ArmInstruction. ARM32 adds:

    Attributes:
        usermode: LDM/STM user-mode register access (^ suffix)
        vector_size: Scalar size for NEON/VFP instructions
        vector_data: Data type code for NEON/VFP instructions
        cps_mode: CPS mode code
        cps_flag: CPS interrupt flag code
        cc: Condition code
        update_flags: True if the instruction updates the flags (S suffix)
        writeback: True if base register writeback is required (!)
        mem_barrier: Memory barrier option code
    """
    mnemonic: str
    op_str: str
    id: int
    size: int
    address: int
    regs_read: IdTuple
    regs_write: IdTuple
    groups: IdTuple
    operands: tuple[OperandArm32, ...]
    raw_bytes: bytes = b""
    usermode: bool = False
    vector_size: int = 0
    vector_data: int = 0
    cps_mode: int = 0
    cps_flag: int = 0
    cc: int = 0
    update_flags: bool = False
    writeback: bool = False
    mem_barrier: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "operands", tuple(self.operands))

    def in_group(self, group: int) -> bool:
        return has_group(self.groups, group)

    def operand(self, index: int) -> Optional[OperandArm32]:
        """Return the operand at index, or None if out of range."""
        if 0 <= index < len(self.operands):
            return self.operands[index]
        return None

    def __str__(self) -> str:
        return format_listing(self)

    def to_dict(self) -> dict:
        result = common_dict(self)
        result.update({
            "usermode": self.usermode,
            "vector_size": self.vector_size,
            "vector_data": self.vector_data,
            "cps_mode": self.cps_mode,
            "cps_flag": self.cps_flag,
            "cc": self.cc,
            "update_flags": self.update_flags,
            "writeback": self.writeback,
            "mem_barrier": self.mem_barrier,
            "operands": [op.to_dict() for op in self.operands],
        })
        return result
