"""
Unit Tests for the Instruction Model
====================================

Tests for InsnArm32/InsnArm64 records built directly (no engine):
- Shared fields and the ArmInstruction protocol
- Group membership and operand lookup
- Listing format and JSON serialization

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import dataclasses

import pytest

from native_capstone.insn import (
    Arm32OperandType,
    Arm64OperandType,
    ArmInstruction,
    InsnArm32,
    InsnArm64,
    InsnGroup,
    MemOperandArm64,
    OperandArm32,
    OperandArm64,
)
from native_capstone.insn.common import has_group, id_tuple


def make_bl(**overrides):
    fields = dict(
        mnemonic="bl",
        op_str="#0xedc",
        id=21,
        size=4,
        address=0x1010,
        regs_read=None,
        regs_write=(4,),
        groups=(InsnGroup.CALL, InsnGroup.JUMP, InsnGroup.BRANCH_RELATIVE),
        operands=[OperandArm64(Arm64OperandType.IMM, 0xEDC)],
        raw_bytes=bytes.fromhex("B3FFFF97"),
    )
    fields.update(overrides)
    return InsnArm64(**fields)


# =============================================================================
# ARM64 Instruction Tests
# =============================================================================

class TestInsnArm64:
    """ARM64 instruction record."""

    def test_protocol(self):
        assert isinstance(make_bl(), ArmInstruction)

    def test_operands_frozen_as_tuple(self):
        insn = make_bl()
        assert isinstance(insn.operands, tuple)
        assert insn.operands[0].imm == 0xEDC

    def test_defaults(self):
        insn = make_bl()
        assert insn.cc == 0
        assert insn.update_flags is False
        assert insn.writeback is False

    def test_in_group(self):
        insn = make_bl()
        assert insn.in_group(InsnGroup.CALL)
        assert insn.in_group(2)
        assert not insn.in_group(InsnGroup.RET)

    def test_in_group_without_groups(self):
        assert not make_bl(groups=None).in_group(InsnGroup.JUMP)

    def test_operand_lookup(self):
        insn = make_bl()
        assert insn.operand(0) is insn.operands[0]
        assert insn.operand(1) is None
        assert insn.operand(-1) is None

    def test_str_listing(self):
        assert str(make_bl()) == "0x00001010: B3 FF FF 97  bl #0xedc"

    def test_str_without_operands(self):
        ret = make_bl(mnemonic="ret", op_str="", operands=[])
        assert str(ret).endswith("  ret")

    def test_to_dict(self):
        data = make_bl().to_dict()
        assert data["mnemonic"] == "bl"
        assert data["address"] == "0x1010"
        assert data["address_int"] == 0x1010
        assert data["bytes"] == "b3ffff97"
        assert data["regs_read"] == []
        assert data["groups"] == [2, 1, 7]
        assert data["operands"][0]["type"] == "IMM"
        assert data["operands"][0]["value"] == 0xEDC

    def test_to_dict_mem_operand(self):
        insn = make_bl(operands=[OperandArm64(Arm64OperandType.MEM, MemOperandArm64(4, 0, -16))])
        assert insn.to_dict()["operands"][0]["value"] == {"base": 4, "index": 0, "disp": -16}

    def test_frozen_and_comparable(self):
        insn = make_bl()
        assert insn == make_bl()
        assert hash(insn) == hash(make_bl())
        with pytest.raises(dataclasses.FrozenInstanceError):
            insn.mnemonic = "b"


# =============================================================================
# ARM32 Instruction Tests
# =============================================================================

class TestInsnArm32:
    """ARM32 instruction record."""

    def test_arm32_fields(self):
        insn = InsnArm32(
            mnemonic="cpsid",
            op_str="if",
            id=30,
            size=4,
            address=0x8000,
            regs_read=None,
            regs_write=None,
            groups=None,
            operands=[],
            cps_mode=3,
            cps_flag=6,
            cc=15,
        )
        assert insn.cps_mode == 3
        assert insn.cps_flag == 6
        assert insn.usermode is False
        assert insn.mem_barrier == 0
        assert isinstance(insn, ArmInstruction)

    def test_to_dict_includes_arm32_fields(self):
        insn = InsnArm32(
            mnemonic="mov", op_str="r0, #0", id=1, size=4, address=0,
            regs_read=None, regs_write=None, groups=None,
            operands=[OperandArm32(Arm32OperandType.REG, 66), OperandArm32(Arm32OperandType.IMM, 0)],
            raw_bytes=bytes.fromhex("0000A0E3"),
        )
        data = insn.to_dict()
        for key in ("usermode", "vector_size", "vector_data", "cps_mode",
                    "cps_flag", "cc", "update_flags", "writeback", "mem_barrier"):
            assert key in data
        assert [op["type"] for op in data["operands"]] == ["REG", "IMM"]


# =============================================================================
# Id List Helpers
# =============================================================================

class TestIdLists:
    """Register/group id list helpers."""

    def test_empty_list_is_none(self):
        assert id_tuple([]) is None

    def test_ids_are_16_bit(self):
        assert id_tuple([1, 0x1_0002]) == (1, 2)

    def test_has_group(self):
        assert has_group((1, 2), InsnGroup.CALL)
        assert not has_group(None, InsnGroup.CALL)
