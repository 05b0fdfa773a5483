"""
Capstone Engine Handle
======================

Capstone wraps one native engine instance and owns its lifecycle:

    UNINITIALIZED --(constructor)--> OPEN --(close)--> CLOSED

- The constructor creates the engine (detail mode on) or raises
  InitializationError; a failed construction leaves nothing to close.
- close() moves OPEN -> CLOSED exactly once. Calling it again, or calling
  any other operation on a closed handle, raises LifecycleError. The engine
  is never touched after close.

Thread Safety
-------------
A handle may be shared by many threads. The engine itself is not reentrant,
so one lock guards every call into it along with the state check that
precedes the call. Only the engine call runs under the lock; converting its
output into CapstoneResult happens afterwards, in the calling thread.
close() takes the same lock, so it waits for in-flight engine calls and
every later call fails cleanly with LifecycleError.

Usage:
    with Capstone(CapstoneMode.ARM64) as cs:
        result = cs.disassemble(code, address=0x1000)
        for insn in result:
            print(insn)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any, Final, Iterator, Optional, Union

from ..errors import (
    CapstoneError,
    DisassemblyError,
    InitializationError,
    LifecycleError,
)
from ..insn.constants import is_int
from ..insn.result import CapstoneResult
from ..mode import CapstoneMode
from ..native import NativeBindings, load_bindings
from .names import NameResolver
from .writer import create_writer

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Largest base address accepted by disassemble() (64-bit unsigned)
MAX_ADDRESS: Final[int] = 0xFFFF_FFFF_FFFF_FFFF

# Instruction count meaning "decode until the input runs out"
UNBOUNDED: Final[int] = 0

BytesLike = Union[bytes, bytearray, memoryview]


class HandleState(Enum):
    """Lifecycle state of a Capstone handle."""
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    CLOSED = "closed"


# =============================================================================
# Engine Handle
# =============================================================================

class Capstone:
    """
    One live binding to a native Capstone engine.

    Attributes:
        mode: Architecture this handle decodes (fixed at construction)
        state: Current lifecycle state
        names: NameResolver bound to this handle
    """

    def __init__(self, mode: CapstoneMode):
        """
        Create and open an engine for the given mode.

        Args:
            mode: CapstoneMode.ARM32 or CapstoneMode.ARM64

        Raises:
            InitializationError: If mode is invalid or the engine rejects it
            NativeLibraryError: If the Capstone bindings cannot be loaded
        """
        self._lock = threading.Lock()
        self._state = HandleState.UNINITIALIZED
        self._engine: Any = None

        if not isinstance(mode, CapstoneMode):
            raise InitializationError("invalid argument 'mode'", reason=repr(mode))
        self._mode = mode

        self._bindings = load_bindings()
        self._engine = self._create_engine(mode, self._bindings)
        self._writer = create_writer(mode, self._bindings)
        self._names = NameResolver(self)
        self._state = HandleState.OPEN

        logger.debug("Opened %s capstone instance (engine %s)", mode, self._bindings.version_string)

    @staticmethod
    def _create_engine(mode: CapstoneMode, bindings: NativeBindings) -> Any:
        cs = bindings.capstone
        arch = cs.CS_ARCH_ARM if mode is CapstoneMode.ARM32 else cs.CS_ARCH_ARM64
        try:
            engine = cs.Cs(arch, cs.CS_MODE_ARM)
            engine.detail = True
        except cs.CsError as e:
            logger.warning("Failed to create %s engine: %s", mode, e)
            raise InitializationError(f"failed to create {mode} engine", reason=str(e)) from e
        return engine

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> CapstoneMode:
        return self._mode

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is HandleState.OPEN

    @property
    def version(self) -> tuple[int, int]:
        """Engine (major, minor) version."""
        return self._bindings.version

    @property
    def names(self) -> NameResolver:
        return self._names

    def close(self) -> None:
        """
        Close the native engine.

        Raises:
            LifecycleError: If the handle is already closed
        """
        with self._lock:
            if self._state is not HandleState.OPEN:
                raise LifecycleError("close", self._state.value)
            self._release()
        logger.debug("Closed %s capstone instance", self._mode)

    def _release(self) -> None:
        # Caller holds the lock and has seen OPEN.
        self._engine = None
        self._state = HandleState.CLOSED

    def _require_open(self, operation: str) -> None:
        if self._state is not HandleState.OPEN:
            raise LifecycleError(operation, self._state.value)

    def __enter__(self) -> "Capstone":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Closing inside the block is allowed; only close what is still open.
        with self._lock:
            if self._state is not HandleState.OPEN:
                return
            self._release()
        logger.debug("Closed %s capstone instance", self._mode)

    @contextmanager
    def _engine_call(self, operation: str) -> Iterator[Any]:
        """
        Hold the lock and yield the engine, if the handle is open.

        Engine errors raised inside the block are reported as CapstoneError
        with the engine's diagnostic text.
        """
        with self._lock:
            self._require_open(operation)
            try:
                yield self._engine
            except self._bindings.capstone.CsError as e:
                raise CapstoneError(f"cannot {operation}", reason=str(e)) from e

    # -------------------------------------------------------------------------
    # Disassembly
    # -------------------------------------------------------------------------

    def disassemble(
        self,
        data: BytesLike,
        address: int = 0,
        count: int = UNBOUNDED,
    ) -> CapstoneResult:
        """
        Decode instructions from a byte buffer.

        Decoding stops after `count` instructions, at the end of `data`, or
        at the first bytes that do not form a valid instruction. Undecodable
        trailing bytes are dropped silently.

        Args:
            data: Machine code (may be empty)
            address: Address of the first byte (64-bit unsigned)
            count: Maximum number of instructions, 0 for no limit

        Returns:
            A new CapstoneResult holding this call's instructions

        Raises:
            LifecycleError: If the handle is not open (checked before arguments)
            DisassemblyError: If the engine reports an error status
            TypeError: If data is not bytes, bytearray or memoryview
            ValueError: If address or count is out of range
        """
        self._require_open("disassemble")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"data must be bytes-like, got {type(data).__name__}")
        if not is_int(address) or not 0 <= address <= MAX_ADDRESS:
            raise ValueError(f"address must be a 64-bit unsigned int, got {address!r}")
        if not is_int(count) or count < 0:
            raise ValueError(f"count must be a non-negative int, got {count!r}")
        code = bytes(data)

        with self._engine_call("disassemble") as engine:
            if not code:
                raw = []
            else:
                try:
                    raw = list(engine.disasm(code, address, count))
                except self._bindings.capstone.CsError as e:
                    raise DisassemblyError("disassembly failed", reason=str(e)) from e

        instructions = self._writer.write_all(raw)
        logger.debug(
            "Decoded %d instruction(s) from %d byte(s) at 0x%X",
            len(instructions), len(code), address,
        )
        return CapstoneResult(self._mode, instructions)

    def disassemble_all(self, data: BytesLike, address: int = 0) -> CapstoneResult:
        """Decode every instruction in data."""
        return self.disassemble(data, address, UNBOUNDED)

    def disassemble_count(self, data: BytesLike, count: int, address: int = 0) -> CapstoneResult:
        """Decode at most count instructions (count must be positive)."""
        self._require_open("disassemble")
        if not is_int(count) or count <= 0:
            raise ValueError(f"count must be a positive int, got {count!r}")
        return self.disassemble(data, address, count)

    # -------------------------------------------------------------------------
    # Name Lookups
    # -------------------------------------------------------------------------

    def insn_name(self, insn_id: int) -> Optional[str]:
        return self._names.insn_name(insn_id)

    def reg_name(self, reg_id: int) -> Optional[str]:
        return self._names.reg_name(reg_id)

    def group_name(self, group_id: int) -> Optional[str]:
        return self._names.group_name(group_id)

    def __repr__(self) -> str:
        return f"Capstone(mode={self._mode}, state={self._state.value})"
