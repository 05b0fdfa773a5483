"""
Native Capstone Command-Line Interface
======================================

This package provides the command-line tools for Native Capstone:

- **csdisasm**: ARM32/ARM64 disassembler

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["csdisasm"]
