"""
Native Capstone Error Hierarchy
===============================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from CapstoneError, allowing callers to catch every
library error with a single except clause if desired.

Exception Hierarchy
-------------------
CapstoneError (base)
├── InitializationError - engine could not be created for a mode
│   └── NativeLibraryError - Capstone bindings missing or unusable
├── LifecycleError - operation attempted on a handle that is not open
├── DisassemblyError - engine reported an error status while decoding
└── InvalidOperandKindError - operand accessor used on the wrong kind

What Is NOT An Error
--------------------
- Unknown instruction, register or group ids: name lookups return None.
- Undecodable trailing bytes: decoding stops early and returns a short
  result. This is the normal "best-effort stream decode" behavior.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class CapstoneError(Exception):
    """
    Base exception for all native_capstone errors.

    Attributes:
        message: The error description
        reason: Diagnostic text reported by the underlying engine (optional)
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        self.message = message
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format as 'message: reason' when engine text is available."""
        if self.reason:
            return f"{self.message}: {self.reason}"
        return self.message


# =============================================================================
# Engine Creation
# =============================================================================

class InitializationError(CapstoneError):
    """
    The engine could not be created for the requested mode.

    Raised from the Capstone constructor. The handle is never usable after
    this error; there is nothing to close.

    Common causes:
        - mode is not a CapstoneMode member
        - the engine rejected the architecture/mode combination
    """
    pass


class NativeLibraryError(InitializationError):
    """
    The Capstone bindings could not be loaded.

    Raised when the `capstone` package is not installed, its shared library
    failed to load, or the installed engine version is not supported. The
    failure is remembered for the lifetime of the process.
    """
    pass


# =============================================================================
# Handle Lifecycle
# =============================================================================

class LifecycleError(CapstoneError):
    """
    Operation attempted on a handle that is not open.

    Raised by decode, name lookups and close() once the handle has been
    closed. A second close() raises this too, so double-close is detectable.
    """

    def __init__(self, operation: str, state: str, reason: Optional[str] = None):
        self.operation = operation
        self.state = state
        super().__init__(
            f"cannot {operation}: capstone instance is {state}",
            reason=reason,
        )


# =============================================================================
# Decoding
# =============================================================================

class DisassemblyError(CapstoneError):
    """
    The engine reported an error while decoding.

    This is distinct from running into undecodable bytes, which simply ends
    the instruction stream.
    """
    pass


# =============================================================================
# Operand Accessors
# =============================================================================

class InvalidOperandKindError(CapstoneError, TypeError):
    """
    Operand accessor used for a kind other than the operand's own.

    This is a programming error, not a decode-time condition:

        op = insn.operands[0]       # a register operand
        op.imm                      # raises InvalidOperandKindError

    Attributes:
        expected: The kind the accessor reads
        actual: The kind the operand actually holds
    """

    def __init__(self, expected: object, actual: object):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"invalid operand kind: expected {_kind_name(expected)}, "
            f"operand is {_kind_name(actual)}"
        )


def _kind_name(kind: object) -> str:
    name = getattr(kind, "name", None)
    return name if name is not None else str(kind)
