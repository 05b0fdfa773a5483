#!/usr/bin/env python3
"""
Native Capstone Walkthrough
===========================

This script demonstrates how to use Native Capstone to:
1. Open an ARM64 engine handle
2. Decode a short function
3. Inspect operands through the kind-checked accessors
4. Resolve register and group names
5. Share one handle between threads

Usage:
    source .venv/bin/activate
    python examples/arm64_walkthrough.py

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from concurrent.futures import ThreadPoolExecutor

from native_capstone import (
    Arm64OperandType,
    Capstone,
    CapstoneMode,
    InsnGroup,
    InvalidOperandKindError,
)

# A small AArch64 function: prologue, call, return 0, epilogue
CODE = bytes.fromhex(
    "FD7BBFA9" "FD030091" "00000090" "00401E91"
    "B3FFFF97" "00008052" "FD7BC1A8" "C0035FD6"
)


def main():
    # ==========================================================================
    # 1. Open a handle
    # ==========================================================================
    # The handle owns the native engine; the with-block closes it.

    with Capstone(CapstoneMode.ARM64) as cs:
        print(f"Capstone engine {cs.version[0]}.{cs.version[1]}, mode {cs.mode}")

        # ======================================================================
        # 2. Decode
        # ======================================================================

        result = cs.disassemble(CODE, address=0x1000)
        print(f"\n{result.instruction_count} instructions, {result.total_size} bytes:")
        print(result)

        # ======================================================================
        # 3. Operands
        # ======================================================================
        # Each operand is a tagged union: check the kind, then use the
        # matching accessor. The wrong accessor raises.

        stp = result[0]
        print(f"\nOperands of '{stp.mnemonic} {stp.op_str}':")
        for op in stp.operands:
            if op.is_kind(Arm64OperandType.REG):
                print(f"  register {cs.reg_name(op.reg)}")
            elif op.is_kind(Arm64OperandType.MEM):
                print(f"  memory base={cs.reg_name(op.mem.base)} disp={op.mem.disp}")

        try:
            stp.operands[0].imm
        except InvalidOperandKindError as e:
            print(f"  (expected) {e}")

        # ======================================================================
        # 4. Names and groups
        # ======================================================================

        calls = [insn for insn in result if insn.in_group(InsnGroup.CALL)]
        for insn in calls:
            target = insn.operands[0].imm
            groups = ", ".join(cs.names.group_names(insn))
            print(f"\nCall at 0x{insn.address:X} to 0x{target:X} (groups: {groups})")

        # ======================================================================
        # 5. Threads
        # ======================================================================
        # One handle can serve many threads; every call gets its own result.

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: cs.disassemble(CODE, 0x1000), range(8)))
        print(f"\n{len(results)} concurrent decodes identical: {all(r == result for r in results)}")

    print(f"\nHandle state after the with-block: {cs.state.value}")


if __name__ == "__main__":
    main()
