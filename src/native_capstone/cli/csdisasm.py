"""
csdisasm - ARM32/ARM64 Disassembler Command-Line Interface
==========================================================

This module implements the command-line interface for Native Capstone. It
disassembles raw ARM32 or ARM64 machine code from a binary file.

Usage Examples
--------------
Disassemble AArch64 code:
    $ csdisasm code.bin

With base address:
    $ csdisasm code.bin --address 0x1000

ARM32 code, first 20 instructions:
    $ csdisasm code.bin --mode arm32 --count 20

Show operands, registers and groups:
    $ csdisasm code.bin --details

Machine-readable output:
    $ csdisasm code.bin --json -o listing.json

Defaults for --mode, --address and --count can be set through the
NATIVE_CAPSTONE_* environment variables (see native_capstone.config).

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from native_capstone import __version__
from native_capstone.cli.errors import ExitCode, handle_cli_exception
from native_capstone.config import DisassemblerConfig, parse_address
from native_capstone.engine import MAX_ADDRESS, Capstone
from native_capstone.insn import CapstoneResult
from native_capstone.mode import CapstoneMode

logger = logging.getLogger(__name__)


# =============================================================================
# Formatting Helpers
# =============================================================================

def _reg(cs: Capstone, reg_id: int) -> str:
    return cs.reg_name(reg_id) or str(reg_id)


def _describe_operand(cs: Capstone, op) -> str:
    """Render one operand as 'KIND value' using register names."""
    kind = op.type.name
    if kind == "INVALID":
        return kind
    if kind == "REG":
        text = _reg(cs, op.reg)
    elif kind == "MEM":
        mem = op.mem
        parts = []
        if mem.base:
            parts.append(_reg(cs, mem.base))
        if mem.index:
            # ARM32 flags a subtracted index on the operand, not in mem.scale
            sign = "-" if getattr(op, "subtracted", False) else ""
            parts.append(sign + _reg(cs, mem.index))
        if mem.disp:
            parts.append(f"#{mem.disp:#x}" if mem.disp > 0 else f"#-{-mem.disp:#x}")
        text = "[" + ", ".join(parts) + "]"
    elif isinstance(op.value, int):
        text = f"{op.value:#x}" if op.value >= 0 else f"-{-op.value:#x}"
    else:
        text = str(op.value)

    if op.shift_type.name != "INVALID":
        text += f" {op.shift_type.name.lower()} {op.shift_value}"
    if op.vector_index != -1:
        text += f"[{op.vector_index}]"
    return f"{kind} {text}"


def _detail_lines(cs: Capstone, insn) -> list[str]:
    lines = []
    for i, op in enumerate(insn.operands):
        lines.append(f";     op{i}: {_describe_operand(cs, op)}")
    if insn.regs_read:
        lines.append(";     reads: " + ", ".join(cs.names.register_names(insn.regs_read)))
    if insn.regs_write:
        lines.append(";     writes: " + ", ".join(cs.names.register_names(insn.regs_write)))
    if insn.groups:
        lines.append(";     groups: " + ", ".join(cs.names.group_names(insn)))
    return lines


def _hex_dump(data: bytes, base_address: int) -> list[str]:
    lines = ["; Hex dump:", "; " + "-" * 60]
    for i in range(0, len(data), 16):
        chunk = data[i:i+16]
        hex_str = " ".join(f"{b:02X}" for b in chunk)
        ascii_str = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
        lines.append(f"; 0x{base_address + i:08X}: {hex_str:<48} {ascii_str}")
    lines.append("; " + "-" * 60)
    lines.append("")
    return lines


def _listing(
    cs: Capstone,
    result: CapstoneResult,
    input_file: Path,
    data: bytes,
    base_address: int,
    show_hex: bool,
    no_bytes: bool,
    details: bool,
) -> str:
    output_lines = [
        f"; Disassembly of {input_file.name}",
        f"; Size: {len(data)} bytes",
        f"; Base address: 0x{base_address:08X}",
        f"; Mode: {cs.mode}",
        "",
    ]

    if show_hex:
        output_lines.extend(_hex_dump(data, base_address))

    for insn in result:
        if no_bytes:
            asm = f"{insn.mnemonic} {insn.op_str}" if insn.op_str else insn.mnemonic
            output_lines.append(f"0x{insn.address:08X}: {asm}")
        else:
            output_lines.append(str(insn))
        if details:
            output_lines.extend(_detail_lines(cs, insn))

    undecoded = len(data) - result.total_size
    if undecoded:
        output_lines.append(f"; {undecoded} trailing byte(s) not decoded")

    return "\n".join(output_lines) + "\n"


def _json_listing(cs: Capstone, result: CapstoneResult, base_address: int, details: bool) -> str:
    records = []
    for insn in result:
        record = insn.to_dict()
        if details:
            record["group_names"] = cs.names.group_names(insn)
            record["regs_read_names"] = cs.names.register_names(insn.regs_read)
            record["regs_write_names"] = cs.names.register_names(insn.regs_write)
        records.append(record)
    document = {
        "mode": str(cs.mode),
        "address": base_address,
        "instruction_count": result.instruction_count,
        "total_size": result.total_size,
        "instructions": records,
    }
    return json.dumps(document, indent=2) + "\n"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-m", "--mode",
    type=click.Choice(["arm32", "arm64"], case_sensitive=False),
    default=None,
    help="Architecture to decode (default: arm64, or NATIVE_CAPSTONE_MODE)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-a", "--address",
    type=str,
    default=None,
    help="Base address for disassembly (hex with 0x or $ prefix, or decimal). Default: 0",
)
@click.option(
    "-c", "--count",
    type=int,
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "--hex",
    "show_hex",
    is_flag=True,
    help="Include hex dump before disassembly",
)
@click.option(
    "--no-bytes",
    is_flag=True,
    help="Omit raw bytes from output (show only mnemonic and operands)",
)
@click.option(
    "-d", "--details",
    is_flag=True,
    help="Show operands, registers read/written and instruction groups",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Write instructions as JSON instead of a listing",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="csdisasm")
def main(
    input_file: Path,
    mode: Optional[str],
    output: Optional[Path],
    address: Optional[str],
    count: Optional[int],
    show_hex: bool,
    no_bytes: bool,
    details: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """
    Disassemble ARM32 or ARM64 machine code.

    INPUT_FILE is the binary file to disassemble.

    Examples:

        # Disassemble AArch64 code at address 0x1000
        csdisasm code.bin --address 0x1000

        # First 20 ARM32 instructions to a file
        csdisasm code.bin --mode arm32 --count 20 -o listing.s

        # JSON with register and group names
        csdisasm code.bin --json --details
    """
    config = DisassemblerConfig.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.log_level),
        format="%(levelname)s: %(message)s",
    )

    try:
        cs_mode = CapstoneMode.from_name(mode) if mode else config.default_mode

        if address is None:
            base_address = config.default_address
        else:
            try:
                base_address = parse_address(address)
            except ValueError:
                raise click.BadParameter(f"Invalid address '{address}'", param_hint="--address")
        if base_address > MAX_ADDRESS:
            raise click.BadParameter("Address must fit in 64 bits", param_hint="--address")

        limit = config.default_count if count is None else count
        if limit < 0:
            raise click.BadParameter("Count must not be negative", param_hint="--count")

        data = input_file.read_bytes()
        if len(data) == 0:
            click.echo(f"Error: {input_file} is empty", err=True)
            sys.exit(ExitCode.INVALID_ARGS)

        if verbose:
            click.echo(f"Input file: {input_file} ({len(data)} bytes)", err=True)
            click.echo(f"Base address: 0x{base_address:08X}", err=True)
            click.echo(f"Mode: {cs_mode}", err=True)

        # Names are resolved through the engine, so render before closing it
        with Capstone(cs_mode) as cs:
            result = cs.disassemble(data, address=base_address, count=limit)
            if as_json:
                text = _json_listing(cs, result, base_address, details)
            else:
                text = _listing(cs, result, input_file, data, base_address,
                                show_hex, no_bytes, details)

        if output:
            output.write_text(text, encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        else:
            click.echo(text, nl=False)

        if verbose:
            click.echo(f"Instructions disassembled: {result.instruction_count}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose, error_type="Disassembly")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
