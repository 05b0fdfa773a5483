"""
Name Resolution
===============

Resolves numeric instruction, register and group ids to the engine's
human-readable names. Unknown ids are not errors: they resolve to None.

Lookups go through the owning handle, so they require it to be open and
raise LifecycleError once it has been closed.

Usage:
    with Capstone(CapstoneMode.ARM64) as cs:
        result = cs.disassemble(code, address=0x1000)
        insn = result[4]
        cs.names.insn_name(insn.id)          # "bl"
        cs.names.group_names(insn)           # ["call", "jump", "branch_relative"]

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from ..insn.common import ArmInstruction
from ..insn.constants import is_int

if TYPE_CHECKING:
    from .capstone import Capstone


_MAX_ID = 0xFFFFFFFF


class NameResolver:
    """
    Id-to-name lookups bound to one Capstone handle.

    Created by the handle; reach it through `Capstone.names`.
    """

    def __init__(self, handle: "Capstone"):
        self._handle = handle

    def insn_name(self, insn_id: int) -> Optional[str]:
        """Name of an instruction id, or None if the engine does not know it."""
        return self._lookup("resolve instruction name", insn_id, lambda e, i: e.insn_name(i))

    def reg_name(self, reg_id: int) -> Optional[str]:
        """Name of a register id, or None if the engine does not know it."""
        return self._lookup("resolve register name", reg_id, lambda e, i: e.reg_name(i))

    def group_name(self, group_id: int) -> Optional[str]:
        """Name of a group id, or None if the engine does not know it."""
        return self._lookup("resolve group name", group_id, lambda e, i: e.group_name(i))

    def register_names(self, reg_ids: Optional[Iterable[int]]) -> list[str]:
        """
        Names for a list of register ids.

        Unknown ids are rendered as their decimal value so positions are
        preserved. None (no registers) gives an empty list.
        """
        if not reg_ids:
            return []
        return [self.reg_name(r) or str(r) for r in reg_ids]

    def group_names(self, insn: ArmInstruction) -> list[str]:
        """Names of an instruction's groups, in the order the engine lists them."""
        if not insn.groups:
            return []
        return [self.group_name(g) or str(g) for g in insn.groups]

    def _lookup(
        self,
        operation: str,
        ident: int,
        query: Callable[[Any, int], Optional[str]],
    ) -> Optional[str]:
        self._handle._require_open(operation)
        if not is_int(ident):
            raise TypeError(f"id must be an int, got {type(ident).__name__}")
        with self._handle._engine_call(operation) as engine:
            if not 0 <= ident <= _MAX_ID:
                return None
            return query(engine, int(ident))
