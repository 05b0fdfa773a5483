"""
Disassembly Result
==================

CapstoneResult is the output of one decode call: an immutable, ordered
sequence of instructions in byte-stream order. Every call produces a fresh
result; results are never refilled or shared between calls.

A result is a plain value. Reading its instructions does not need the
handle that produced it; only resolving ids to names does.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from collections.abc import Sequence
from typing import Generic, Iterable, Iterator, TypeVar, Union, overload

from ..mode import CapstoneMode
from .arm32 import InsnArm32
from .arm64 import InsnArm64


InsnT = TypeVar("InsnT", InsnArm32, InsnArm64)

_INSN_CLASS: dict[CapstoneMode, type] = {
    CapstoneMode.ARM32: InsnArm32,
    CapstoneMode.ARM64: InsnArm64,
}


class CapstoneResult(Sequence, Generic[InsnT]):
    """
    Read-only view of the instructions produced by one decode call.

    Supports len(), indexing, slicing (slices are tuples) and iteration.
    There is no mutation API; `instructions` returns the backing tuple and
    to_list() returns an independent copy.

    Attributes:
        mode: Architecture of every instruction in the result
    """

    __slots__ = ("_mode", "_instructions")

    def __init__(self, mode: CapstoneMode, instructions: Iterable[InsnT] = ()):
        """
        Build a result from fully decoded instructions.

        Raises:
            TypeError: If an instruction does not belong to mode's variant
        """
        insns = tuple(instructions)
        expected = _INSN_CLASS[mode]
        for insn in insns:
            if not isinstance(insn, expected):
                raise TypeError(
                    f"{mode} result cannot hold {type(insn).__name__}"
                )
        self._mode = mode
        self._instructions = insns

    @classmethod
    def empty(cls, mode: CapstoneMode) -> "CapstoneResult":
        return cls(mode, ())

    @property
    def mode(self) -> CapstoneMode:
        return self._mode

    @property
    def instructions(self) -> tuple[InsnT, ...]:
        return self._instructions

    @property
    def instruction_count(self) -> int:
        return len(self._instructions)

    @property
    def total_size(self) -> int:
        """Number of bytes covered by the decoded instructions."""
        return sum(insn.size for insn in self._instructions)

    @property
    def end_address(self) -> int:
        """Address just after the last decoded instruction."""
        if not self._instructions:
            return 0
        last = self._instructions[-1]
        return last.address + last.size

    def to_list(self) -> list[InsnT]:
        return list(self._instructions)

    @overload
    def __getitem__(self, index: int) -> InsnT: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[InsnT, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self._instructions[index]

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[InsnT]:
        return iter(self._instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CapstoneResult):
            return NotImplemented
        return self._mode == other._mode and self._instructions == other._instructions

    def __hash__(self) -> int:
        return hash((self._mode, self._instructions))

    def __repr__(self) -> str:
        return f"CapstoneResult(mode={self._mode}, instructions={len(self._instructions)})"

    def __str__(self) -> str:
        return "\n".join(str(insn) for insn in self._instructions)
