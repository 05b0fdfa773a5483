"""
Instruction Writers
===================

Convert the engine's instruction objects into the immutable ARM32/ARM64
model in a single step. Nothing outside this module ever sees a partially
populated instruction.

One writer exists per architecture; create_writer() selects it from the
handle's mode. Writers read only data the engine has already copied out of
its native buffers, so they run outside the handle's lock.

Operand Kind Mapping
--------------------
The engine numbers its basic operand kinds 0-4 and its extra kinds from 64
upwards. The writers map each engine constant onto the model's own dense
numbering by name (ARM_OP_SYSREG -> Arm32OperandType.SYSREG, and so on).
Engine kinds the model does not know (for example the ARM64 SME operands)
become INVALID operands with no payload.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import IntEnum
from typing import Any, Callable, Iterable, Type, TypeVar

from ..errors import DisassemblyError
from ..insn.arm32 import InsnArm32, MemOperandArm32, OperandArm32
from ..insn.arm64 import InsnArm64, MemOperandArm64, OperandArm64
from ..insn.common import ArmInstruction, id_tuple
from ..insn.constants import (
    Arm32OperandType,
    Arm32ShiftType,
    Arm64Extender,
    Arm64OperandType,
    Arm64ShiftType,
    to_int8,
    to_int32,
    to_int64,
    to_uint32,
)
from ..mode import CapstoneMode
from ..native import NativeBindings


EnumT = TypeVar("EnumT", bound=IntEnum)


def _constant_map(table: Any, prefix: str, enum: Type[EnumT]) -> dict[int, EnumT]:
    """Map engine constants named PREFIX_<MEMBER> onto enum members."""
    mapping = {}
    for member in enum:
        value = getattr(table, f"{prefix}{member.name}", None)
        if value is not None:
            mapping[value] = member
    return mapping


# =============================================================================
# Payload Readers
# =============================================================================

# Each reader takes an engine operand and returns the model payload.
# Engine operands expose the raw payload union as `op.value`.

_ARM32_PAYLOAD: dict[Arm32OperandType, Callable[[Any], Any]] = {
    Arm32OperandType.REG: lambda op: to_int32(op.value.reg),
    Arm32OperandType.IMM: lambda op: to_int32(op.value.imm),
    Arm32OperandType.MEM: lambda op: MemOperandArm32(
        base=to_int32(op.value.mem.base),
        index=to_int32(op.value.mem.index),
        scale=to_int32(op.value.mem.scale),
        disp=to_int32(op.value.mem.disp),
    ),
    Arm32OperandType.FP: lambda op: float(op.value.fp),
    Arm32OperandType.CIMM: lambda op: to_int32(op.value.imm),
    Arm32OperandType.PIMM: lambda op: to_int32(op.value.imm),
    Arm32OperandType.SETEND: lambda op: to_int8(op.value.setend),
    Arm32OperandType.SYSREG: lambda op: to_int32(op.value.reg),
}

_ARM64_PAYLOAD: dict[Arm64OperandType, Callable[[Any], Any]] = {
    Arm64OperandType.REG: lambda op: to_int32(op.value.reg),
    Arm64OperandType.IMM: lambda op: to_int64(op.value.imm),
    Arm64OperandType.MEM: lambda op: MemOperandArm64(
        base=to_int32(op.value.mem.base),
        index=to_int32(op.value.mem.index),
        disp=to_int32(op.value.mem.disp),
    ),
    Arm64OperandType.FP: lambda op: float(op.value.fp),
    Arm64OperandType.CIMM: lambda op: to_int64(op.value.imm),
    Arm64OperandType.REG_MRS: lambda op: to_int32(op.value.reg),
    Arm64OperandType.REG_MSR: lambda op: to_int32(op.value.reg),
    Arm64OperandType.PSTATE: lambda op: to_int8(op.value.pstate),
    Arm64OperandType.SYS: lambda op: to_uint32(op.value.sys),
    Arm64OperandType.PREFETCH: lambda op: to_int8(op.value.prefetch),
    Arm64OperandType.BARRIER: lambda op: to_int8(op.value.barrier),
}


# =============================================================================
# Writers
# =============================================================================

class InstructionWriter:
    """
    Base class for architecture writers.

    Subclasses implement _write_insn() for their architecture. write() wraps
    engine errors (for example, detail mode being off) in DisassemblyError.

    Attributes:
        insn_class: The instruction record class this writer produces
    """

    insn_class: type = object

    def __init__(self, bindings: NativeBindings):
        self._engine_error = bindings.capstone.CsError

    def write(self, insn: Any) -> ArmInstruction:
        """Convert one engine instruction into a model instruction."""
        try:
            return self._write_insn(insn)
        except self._engine_error as e:
            raise DisassemblyError(
                f"cannot read instruction detail at 0x{insn.address:X}",
                reason=str(e),
            ) from e

    def write_all(self, insns: Iterable[Any]) -> list[ArmInstruction]:
        return [self.write(insn) for insn in insns]

    def _write_insn(self, insn: Any) -> ArmInstruction:
        raise NotImplementedError

    @staticmethod
    def _common_fields(insn: Any) -> dict:
        return {
            "mnemonic": insn.mnemonic,
            "op_str": insn.op_str,
            "id": to_int32(insn.id),
            "size": insn.size,
            "address": insn.address,
            "regs_read": id_tuple(insn.regs_read),
            "regs_write": id_tuple(insn.regs_write),
            "groups": id_tuple(insn.groups),
            "raw_bytes": bytes(insn.bytes),
        }


class Arm32Writer(InstructionWriter):
    """Writer for ARM32 instructions."""

    insn_class = InsnArm32

    def __init__(self, bindings: NativeBindings):
        super().__init__(bindings)
        self._operand_kinds = _constant_map(bindings.arm, "ARM_OP_", Arm32OperandType)
        self._shift_types = _constant_map(bindings.arm, "ARM_SFT_", Arm32ShiftType)

    def _write_insn(self, insn: Any) -> InsnArm32:
        return InsnArm32(
            **self._common_fields(insn),
            operands=tuple(self._write_operand(op) for op in insn.operands),
            usermode=bool(insn.usermode),
            vector_size=to_int32(insn.vector_size),
            vector_data=to_int8(insn.vector_data),
            cps_mode=to_int8(insn.cps_mode),
            cps_flag=to_int8(insn.cps_flag),
            cc=to_int8(insn.cc),
            update_flags=bool(insn.update_flags),
            writeback=bool(insn.writeback),
            mem_barrier=to_int8(insn.mem_barrier),
        )

    def _write_operand(self, op: Any) -> OperandArm32:
        kind = self._operand_kinds.get(op.type, Arm32OperandType.INVALID)
        reader = _ARM32_PAYLOAD.get(kind)
        return OperandArm32(
            type=kind,
            value=reader(op) if reader is not None else None,
            vector_index=to_int32(op.vector_index),
            subtracted=bool(op.subtracted),
            shift_type=self._shift_types.get(op.shift.type, Arm32ShiftType.INVALID),
            shift_value=to_uint32(op.shift.value),
        )


class Arm64Writer(InstructionWriter):
    """Writer for ARM64 instructions."""

    insn_class = InsnArm64

    def __init__(self, bindings: NativeBindings):
        super().__init__(bindings)
        self._operand_kinds = _constant_map(bindings.arm64, "ARM64_OP_", Arm64OperandType)
        self._shift_types = _constant_map(bindings.arm64, "ARM64_SFT_", Arm64ShiftType)
        self._extenders = _constant_map(bindings.arm64, "ARM64_EXT_", Arm64Extender)

    def _write_insn(self, insn: Any) -> InsnArm64:
        return InsnArm64(
            **self._common_fields(insn),
            operands=tuple(self._write_operand(op) for op in insn.operands),
            cc=to_int8(insn.cc),
            update_flags=bool(insn.update_flags),
            writeback=bool(insn.writeback),
        )

    def _write_operand(self, op: Any) -> OperandArm64:
        kind = self._operand_kinds.get(op.type, Arm64OperandType.INVALID)
        reader = _ARM64_PAYLOAD.get(kind)
        return OperandArm64(
            type=kind,
            value=reader(op) if reader is not None else None,
            vector_index=to_int32(op.vector_index),
            vas=to_int8(op.vas),
            shift_type=self._shift_types.get(op.shift.type, Arm64ShiftType.INVALID),
            shift_value=to_uint32(op.shift.value),
            ext=self._extenders.get(op.ext, Arm64Extender.INVALID),
        )


_WRITERS: dict[CapstoneMode, Type[InstructionWriter]] = {
    CapstoneMode.ARM32: Arm32Writer,
    CapstoneMode.ARM64: Arm64Writer,
}


def create_writer(mode: CapstoneMode, bindings: NativeBindings) -> InstructionWriter:
    """Create the instruction writer for the given mode."""
    return _WRITERS[mode](bindings)
