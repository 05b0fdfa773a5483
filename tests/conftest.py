"""
Native Capstone - Test Configuration
====================================

Shared fixtures for the test suite:
- ARM32/ARM64 handles that are closed after each test
- The AArch64 function prologue/epilogue used across decode tests
- Fake engine instructions for writer tests

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from types import SimpleNamespace

import pytest

from native_capstone import Capstone, CapstoneMode
from native_capstone.native import load_bindings


# =============================================================================
# Code Samples
# =============================================================================

# stp x29, x30, [sp, #-0x10]! / mov x29, sp / adrp x0, 0x1000 / add x0, x0, #0x790
# bl 0xedc / mov w0, #0 / ldp x29, x30, [sp], #0x10 / ret
ARM64_CODE = bytes.fromhex(
    "FD7BBFA9" "FD030091" "00000090" "00401E91"
    "B3FFFF97" "00008052" "FD7BC1A8" "C0035FD6"
)
ARM64_ADDRESS = 0x1000
ARM64_MNEMONICS = ["stp", "mov", "adrp", "add", "bl", "mov", "ldp", "ret"]

# str lr, [sp, #-4]! / mov r0, #0 / bx lr
ARM32_CODE = bytes.fromhex("04E02DE5" "0000A0E3" "1EFF2FE1")


# =============================================================================
# Handle Fixtures
# =============================================================================

@pytest.fixture
def arm64():
    """Open ARM64 handle, closed after the test if still open."""
    cs = Capstone(CapstoneMode.ARM64)
    yield cs
    if cs.is_open:
        cs.close()


@pytest.fixture
def arm32():
    """Open ARM32 handle, closed after the test if still open."""
    cs = Capstone(CapstoneMode.ARM32)
    yield cs
    if cs.is_open:
        cs.close()


@pytest.fixture
def arm64_result(arm64):
    """The sample function decoded at 0x1000."""
    return arm64.disassemble(ARM64_CODE, address=ARM64_ADDRESS)


@pytest.fixture
def bindings():
    return load_bindings()


# =============================================================================
# Fake Engine Objects
# =============================================================================

def fake_shift(type=0, value=0):
    return SimpleNamespace(type=type, value=value)


def fake_value(**fields):
    """Operand payload union; unset members read as 0."""
    defaults = dict(reg=0, imm=0, fp=0.0, mem=None, setend=0,
                    pstate=0, sys=0, prefetch=0, barrier=0)
    defaults.update(fields)
    return SimpleNamespace(**defaults)


def fake_insn(operands=(), **fields):
    """Engine instruction with the shared fields filled in."""
    insn = dict(
        mnemonic="nop",
        op_str="",
        id=1,
        size=4,
        address=0x2000,
        regs_read=[],
        regs_write=[],
        groups=[],
        bytes=bytearray(b"\x1f\x20\x03\xd5"),
        operands=list(operands),
    )
    insn.update(fields)
    return SimpleNamespace(**insn)
