"""
Native Capstone - Typed ARM Disassembly on top of the Capstone Engine
=====================================================================

This package exposes the Capstone disassembly engine as a strongly typed,
immutable data model for ARM32 and ARM64 machine code. Decoding itself is
done by Capstone; this package owns how decoded instructions are modeled
and how the engine's lifetime is kept safe across threads.

Main Components
---------------
- **engine**: the Capstone handle (open/close lifecycle, disassembly, name
  lookups) and the writers that build the instruction model
- **insn**: InsnArm32/InsnArm64 records, tagged-union operands with
  kind-checked accessors, and CapstoneResult
- **native**: init-once loading of the Capstone bindings
- **cli**: the `csdisasm` command-line disassembler

Quick Start
-----------
    >>> from native_capstone import Capstone, CapstoneMode
    >>> with Capstone(CapstoneMode.ARM64) as cs:
    ...     result = cs.disassemble(bytes.fromhex("fd7bbfa9"), address=0x1000)
    ...     insn = result[0]
    ...     print(insn.mnemonic, insn.op_str)
    stp x29, x30, [sp, #-0x10]!

Or use the command-line tool:
    $ csdisasm code.bin --mode arm64 --address 0x1000

Version History
---------------
1.0.0 - Initial release with ARM32 and ARM64 support
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from native_capstone.engine import Capstone, HandleState, NameResolver
from native_capstone.errors import (
    CapstoneError,
    InitializationError,
    NativeLibraryError,
    LifecycleError,
    DisassemblyError,
    InvalidOperandKindError,
)
from native_capstone.insn import (
    ArmInstruction,
    CapstoneResult,
    InsnArm32,
    InsnArm64,
    OperandArm32,
    OperandArm64,
    MemOperandArm32,
    MemOperandArm64,
    InsnGroup,
    Arm32OperandType,
    Arm64OperandType,
    Arm32ShiftType,
    Arm64ShiftType,
    Arm64Extender,
)
from native_capstone.mode import CapstoneMode
from native_capstone.native import NativeBindings, load_bindings

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Engine
    "Capstone",
    "CapstoneMode",
    "HandleState",
    "NameResolver",
    "NativeBindings",
    "load_bindings",
    # Instruction model
    "ArmInstruction",
    "CapstoneResult",
    "InsnArm32",
    "InsnArm64",
    "OperandArm32",
    "OperandArm64",
    "MemOperandArm32",
    "MemOperandArm64",
    "InsnGroup",
    "Arm32OperandType",
    "Arm64OperandType",
    "Arm32ShiftType",
    "Arm64ShiftType",
    "Arm64Extender",
    # Exception hierarchy
    "CapstoneError",
    "InitializationError",
    "NativeLibraryError",
    "LifecycleError",
    "DisassemblyError",
    "InvalidOperandKindError",
]
