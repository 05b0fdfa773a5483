"""
Native Binding Loader
=====================

Loads the Capstone engine bindings once per process.

The `capstone` package loads its shared library when it is first imported.
That import is deferred until the first handle is created, so importing
native_capstone never fails on a machine without a usable engine; instead
the first Capstone(...) call raises NativeLibraryError.

Init-Once Semantics
-------------------
- The first call to load_bindings() imports the bindings under a lock.
- Success is cached: every later call returns the same NativeBindings.
- Failure is cached too: every later call raises NativeLibraryError with the
  original diagnostic, without retrying the import.
- reset_bindings() clears the cache (intended for tests).

Supported Engine
----------------
Capstone 5.x with the ARM and ARM64 architectures compiled in. The 6.x
series renamed the ARM64 tables and is not supported.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
import threading
from dataclasses import dataclass
from types import ModuleType
from typing import Final, Optional

from .errors import NativeLibraryError

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

SUPPORTED_MAJOR_VERSION: Final[int] = 5


# =============================================================================
# Bindings Record
# =============================================================================

@dataclass(frozen=True)
class NativeBindings:
    """
    The loaded engine bindings.

    Attributes:
        capstone: The `capstone` module (Cs, CsError, CS_* constants)
        arm: ARM32 constant table (`capstone.arm_const`)
        arm64: ARM64 constant table (`capstone.arm64_const`)
        version: Engine (major, minor) version
    """
    capstone: ModuleType
    arm: ModuleType
    arm64: ModuleType
    version: tuple[int, int]

    @property
    def version_string(self) -> str:
        return f"{self.version[0]}.{self.version[1]}"


_lock = threading.Lock()
_bindings: Optional[NativeBindings] = None
_failure: Optional[NativeLibraryError] = None


# =============================================================================
# Loading
# =============================================================================

def load_bindings() -> NativeBindings:
    """
    Return the process-wide engine bindings, loading them on first use.

    Raises:
        NativeLibraryError: If the bindings are missing, failed to load, or
                            the engine version is not supported. Once raised,
                            the same failure is reported on every call.
    """
    global _bindings, _failure

    with _lock:
        if _bindings is not None:
            return _bindings
        if _failure is not None:
            raise NativeLibraryError(_failure.message, reason=_failure.reason)

        try:
            _bindings = _import_bindings()
        except NativeLibraryError as e:
            _failure = e
            logger.warning("Capstone bindings unavailable: %s", e)
            raise

        logger.debug("Loaded Capstone bindings, engine version %s", _bindings.version_string)
        return _bindings


def reset_bindings() -> None:
    """Forget any cached bindings or failure."""
    global _bindings, _failure
    with _lock:
        _bindings = None
        _failure = None


def _import_bindings() -> NativeBindings:
    try:
        import capstone
        from capstone import arm_const, arm64_const
    except (ImportError, OSError) as e:
        raise NativeLibraryError("failed to load Capstone bindings", reason=str(e)) from e

    major, minor = capstone.cs_version()[:2]
    if major != SUPPORTED_MAJOR_VERSION:
        raise NativeLibraryError(
            "unsupported Capstone engine version",
            reason=f"found {major}.{minor}, expected {SUPPORTED_MAJOR_VERSION}.x",
        )

    for arch_name in ("CS_ARCH_ARM", "CS_ARCH_ARM64"):
        if not capstone.cs_support(getattr(capstone, arch_name)):
            raise NativeLibraryError(
                "Capstone engine built without required architecture",
                reason=arch_name,
            )

    return NativeBindings(
        capstone=capstone,
        arm=arm_const,
        arm64=arm64_const,
        version=(major, minor),
    )
