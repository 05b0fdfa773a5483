"""
Unit Tests for Name Resolution
==============================

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import dataclasses

import pytest
from capstone import arm64_const, arm_const

from native_capstone import InsnGroup, LifecycleError


class TestNameResolver:
    """Instruction, register and group names."""

    def test_instruction_name(self, arm64, arm64_result):
        assert arm64.insn_name(arm64_result[0].id) == "stp"
        assert arm64.names.insn_name(arm64_result[4].id) == "bl"

    def test_register_names(self, arm64, arm64_result):
        # x29/x30 print under their alias names (fp/lr), so check ids there
        stp_ops = arm64_result[0].operands
        assert stp_ops[0].reg == arm64_const.ARM64_REG_X29
        assert stp_ops[1].reg == arm64_const.ARM64_REG_X30
        assert arm64.reg_name(stp_ops[2].mem.base) == "sp"
        adrp = arm64_result[2]
        assert arm64.reg_name(adrp.operands[0].reg) == "x0"

    def test_group_names(self, arm64):
        assert arm64.group_name(InsnGroup.JUMP) == "jump"
        assert arm64.group_name(InsnGroup.CALL) == "call"
        assert arm64.group_name(InsnGroup.BRANCH_RELATIVE) == "branch_relative"

    def test_group_names_of_instruction(self, arm64, arm64_result):
        assert arm64.names.group_names(arm64_result[4]) == ["call", "jump", "branch_relative"]
        assert arm64.names.group_names(arm64_result[0]) == []

    def test_register_name_list(self, arm64):
        names = arm64.names.register_names([arm64_const.ARM64_REG_X0, arm64_const.ARM64_REG_SP])
        assert names == ["x0", "sp"]
        assert arm64.names.register_names(None) == []

    def test_arm32_names(self, arm32):
        assert arm32.reg_name(arm_const.ARM_REG_LR) == "lr"
        assert arm32.insn_name(arm_const.ARM_INS_MOV) == "mov"


class TestUnknownIds:
    """Unknown ids resolve to None, never raise."""

    def test_unknown_instruction(self, arm64):
        assert arm64.insn_name(arm64_const.ARM64_INS_ENDING + 10) is None

    def test_unknown_group(self, arm64):
        assert arm64.group_name(250) is None

    @pytest.mark.parametrize("ident", [-1, 1 << 32, 1 << 40])
    def test_out_of_range_ids(self, arm64, ident):
        assert arm64.insn_name(ident) is None
        assert arm64.reg_name(ident) is None
        assert arm64.group_name(ident) is None

    def test_unknown_group_in_list_uses_number(self, arm64, arm64_result):
        bl = arm64_result[4]
        fake = dataclasses.replace(bl, groups=(InsnGroup.CALL, 250))
        assert arm64.names.group_names(fake) == ["call", "250"]

    def test_non_int_id(self, arm64):
        with pytest.raises(TypeError):
            arm64.reg_name("x29")


class TestNamesAfterClose:

    def test_lookups_require_open_handle(self, arm64):
        arm64.close()
        with pytest.raises(LifecycleError):
            arm64.insn_name(1)
        with pytest.raises(LifecycleError):
            arm64.reg_name(1)
        with pytest.raises(LifecycleError):
            arm64.group_name(1)

    def test_out_of_range_after_close_still_raises(self, arm64):
        arm64.close()
        with pytest.raises(LifecycleError):
            arm64.names.insn_name(-1)

    def test_bad_id_type_after_close_reports_lifecycle(self, arm64):
        arm64.close()
        with pytest.raises(LifecycleError):
            arm64.reg_name("sp")
