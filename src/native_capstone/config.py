"""
Disassembler Configuration
==========================

Defaults used by the command-line tools. Configuration can come from:
- Default values (defined here)
- Environment variables (DisassemblerConfig.from_env)
- Command-line options, which override both

Environment Variables
---------------------
    NATIVE_CAPSTONE_MODE        arm32 / arm64 (default: arm64)
    NATIVE_CAPSTONE_ADDRESS     base address, decimal, 0x hex or $ hex
    NATIVE_CAPSTONE_COUNT       instruction limit, 0 = unbounded
    NATIVE_CAPSTONE_LOG_LEVEL   DEBUG, INFO, WARNING, ERROR

Invalid values are ignored with a warning and the default is kept.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .mode import CapstoneMode

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_address(text: str) -> int:
    """
    Parse an address in decimal, 0x-prefixed hex or $-prefixed hex.

    Raises:
        ValueError: If the text is not a valid non-negative number
    """
    text = text.strip()
    if text.lower().startswith("0x"):
        value = int(text, 16)
    elif text.startswith("$"):
        value = int(text[1:], 16)
    else:
        value = int(text)
    if value < 0:
        raise ValueError(f"address must not be negative: {text}")
    return value


@dataclass
class DisassemblerConfig:
    """
    Configuration for disassembly runs.

    Attributes:
        default_mode: Architecture used when none is given (default: ARM64)
        default_address: Base address of the first byte (default: 0)
        default_count: Instruction limit, 0 = unbounded (default: 0)
        log_level: Logging level name for the CLI (default: "WARNING")
    """

    default_mode: CapstoneMode = CapstoneMode.ARM64
    default_address: int = 0
    default_count: int = 0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DisassemblerConfig":
        """
        Create a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            DisassemblerConfig with overrides applied
        """
        env = os.environ if environ is None else environ
        config = cls()

        if mode := env.get("NATIVE_CAPSTONE_MODE"):
            try:
                config.default_mode = CapstoneMode.from_name(mode)
            except ValueError:
                logger.warning("Ignoring NATIVE_CAPSTONE_MODE=%r", mode)

        if address := env.get("NATIVE_CAPSTONE_ADDRESS"):
            try:
                config.default_address = parse_address(address)
            except ValueError:
                logger.warning("Ignoring NATIVE_CAPSTONE_ADDRESS=%r", address)

        if count := env.get("NATIVE_CAPSTONE_COUNT"):
            try:
                value = int(count)
                if value < 0:
                    raise ValueError(count)
                config.default_count = value
            except ValueError:
                logger.warning("Ignoring NATIVE_CAPSTONE_COUNT=%r", count)

        if level := env.get("NATIVE_CAPSTONE_LOG_LEVEL"):
            if level.upper() in _LOG_LEVELS:
                config.log_level = level.upper()
            else:
                logger.warning("Ignoring NATIVE_CAPSTONE_LOG_LEVEL=%r", level)

        return config
