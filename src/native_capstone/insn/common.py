"""
Shared Instruction Interface
============================

The ARM32 and ARM64 instruction records are separate frozen dataclasses.
They share a common field subset, declared here as a Protocol so code that
only needs mnemonic/address/size/groups can accept either architecture
without a common base class.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import (
    Any,
    Callable,
    Iterable,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from ..errors import InvalidOperandKindError
from .constants import InsnGroup, is_int, to_uint16


IdTuple = Optional[tuple[int, ...]]

# Payload rule for one operand kind: (python type, width normalizer or None)
PayloadRule = tuple[type, Optional[Callable[[int], int]]]


@runtime_checkable
class ArmInstruction(Protocol):
    """
    Fields every decoded ARM instruction carries.

    Attributes:
        mnemonic: Instruction mnemonic (e.g., "stp")
        op_str: Operand text as printed by the engine
        id: Engine instruction id (resolvable with NameResolver.insn_name)
        size: Encoded size in bytes
        address: Address of the first byte
        regs_read: Implicitly read register ids, or None
        regs_write: Implicitly written register ids, or None
        groups: Group ids, or None
        operands: Decoded operands in order
        raw_bytes: The encoded instruction bytes
    """
    mnemonic: str
    op_str: str
    id: int
    size: int
    address: int
    regs_read: IdTuple
    regs_write: IdTuple
    groups: IdTuple
    operands: Sequence[Any]
    raw_bytes: bytes

    def in_group(self, group: int) -> bool: ...

    def to_dict(self) -> dict: ...


# =============================================================================
# Operand Payload Checking
# =============================================================================

def check_payload(kind: Any, value: Any, rules: Mapping[Any, PayloadRule]) -> None:
    """
    Verify that an operand payload matches its discriminant.

    Kinds without a rule (INVALID) must carry no payload. Integer payloads
    must already fit the kind's width: the normalizer must return the value
    unchanged, otherwise the bits would be reinterpreted.

    Raises:
        TypeError: payload has the wrong Python type for the kind
        ValueError: payload is out of range for the kind's width
    """
    rule = rules.get(kind)
    if rule is None:
        if value is not None:
            raise ValueError(f"operand kind {kind.name} carries no payload, got {value!r}")
        return

    payload_type, normalize = rule
    if payload_type is int:
        ok = is_int(value)
    elif payload_type is float:
        ok = isinstance(value, float)
    else:
        ok = isinstance(value, payload_type)
    if not ok:
        raise TypeError(
            f"operand kind {kind.name} expects {payload_type.__name__} payload, "
            f"got {type(value).__name__}"
        )

    if normalize is not None and normalize(value) != value:
        raise ValueError(f"payload {value} out of range for operand kind {kind.name}")


def read_payload(actual: Any, expected: Any, value: Any) -> Any:
    """Return the payload if the discriminant matches, else raise."""
    if actual != expected:
        raise InvalidOperandKindError(expected, actual)
    return value


# =============================================================================
# Id Lists
# =============================================================================

def id_tuple(ids: Iterable[int]) -> IdTuple:
    """
    Freeze a list of register/group ids as 16-bit values.

    An empty list becomes None: "no registers" and "not reported" are the
    same thing to callers.
    """
    result = tuple(to_uint16(i) for i in ids)
    return result or None


def has_group(groups: IdTuple, group: int) -> bool:
    """True if a group id list contains the given group."""
    return groups is not None and int(group) in groups


def format_listing(insn: ArmInstruction) -> str:
    """Format as a listing line: ADDRESS: BYTES  MNEMONIC OPERANDS"""
    hex_bytes = " ".join(f"{b:02X}" for b in insn.raw_bytes).ljust(11)
    asm = f"{insn.mnemonic} {insn.op_str}" if insn.op_str else insn.mnemonic
    return f"0x{insn.address:08X}: {hex_bytes}  {asm}"


def common_dict(insn: ArmInstruction) -> dict:
    """Serialize the shared fields for JSON output."""
    return {
        "address": f"0x{insn.address:X}",
        "address_int": insn.address,
        "mnemonic": insn.mnemonic,
        "operand": insn.op_str,
        "id": insn.id,
        "size": insn.size,
        "bytes": insn.raw_bytes.hex(),
        "regs_read": list(insn.regs_read) if insn.regs_read else [],
        "regs_write": list(insn.regs_write) if insn.regs_write else [],
        "groups": list(insn.groups) if insn.groups else [],
    }


__all__ = [
    "ArmInstruction",
    "IdTuple",
    "InsnGroup",
    "PayloadRule",
    "check_payload",
    "read_payload",
    "id_tuple",
    "has_group",
    "format_listing",
    "common_dict",
]
