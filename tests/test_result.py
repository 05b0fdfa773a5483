"""
Unit Tests for CapstoneResult
=============================

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest

from native_capstone import CapstoneMode, CapstoneResult, InsnArm32, InsnArm64


def insn64(address, mnemonic="nop"):
    return InsnArm64(
        mnemonic=mnemonic, op_str="", id=1, size=4, address=address,
        regs_read=None, regs_write=None, groups=None, operands=(),
    )


def insn32(address):
    return InsnArm32(
        mnemonic="nop", op_str="", id=1, size=4, address=address,
        regs_read=None, regs_write=None, groups=None, operands=(),
    )


class TestCapstoneResult:
    """Read-only instruction sequence."""

    def setup_method(self):
        self.insns = [insn64(0x1000), insn64(0x1004, "ret")]
        self.result = CapstoneResult(CapstoneMode.ARM64, self.insns)

    def test_sequence_protocol(self):
        assert len(self.result) == 2
        assert self.result[1].mnemonic == "ret"
        assert list(self.result) == self.insns
        assert self.result[-1] is self.insns[-1]

    def test_slice_is_tuple(self):
        assert self.result[:1] == (self.insns[0],)

    def test_counts_and_sizes(self):
        assert self.result.instruction_count == 2
        assert self.result.total_size == 8
        assert self.result.end_address == 0x1008

    def test_empty(self):
        empty = CapstoneResult.empty(CapstoneMode.ARM32)
        assert len(empty) == 0
        assert empty.mode is CapstoneMode.ARM32
        assert empty.total_size == 0
        assert empty.end_address == 0
        assert str(empty) == ""

    def test_to_list_is_a_copy(self):
        copy = self.result.to_list()
        copy.clear()
        assert len(self.result) == 2

    def test_source_list_mutation_does_not_leak(self):
        self.insns.append(insn64(0x1008))
        assert len(self.result) == 2

    def test_no_item_assignment(self):
        with pytest.raises(TypeError):
            self.result[0] = insn64(0)

    def test_equality(self):
        same = CapstoneResult(CapstoneMode.ARM64, list(self.insns))
        assert self.result == same
        assert hash(self.result) == hash(same)
        assert self.result != CapstoneResult.empty(CapstoneMode.ARM64)

    def test_variant_must_match_mode(self):
        with pytest.raises(TypeError):
            CapstoneResult(CapstoneMode.ARM64, [insn32(0)])
        with pytest.raises(TypeError):
            CapstoneResult(CapstoneMode.ARM32, [insn64(0)])

    def test_str_lists_instructions(self):
        lines = str(self.result).splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("0x00001000:")

    def test_repr(self):
        assert repr(self.result) == "CapstoneResult(mode=ARM64, instructions=2)"
