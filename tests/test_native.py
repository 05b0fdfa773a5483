"""
Unit Tests for the Native Binding Loader
========================================

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import sys

import capstone
import pytest

from native_capstone import Capstone, CapstoneMode, InitializationError, NativeLibraryError
from native_capstone import native


@pytest.fixture
def fresh_loader():
    """Start and finish with an empty loader cache."""
    native.reset_bindings()
    yield
    native.reset_bindings()


class TestLoadBindings:
    """Init-once loading."""

    def test_success_is_cached(self, fresh_loader):
        first = native.load_bindings()
        assert native.load_bindings() is first
        assert first.capstone is capstone
        assert first.version[0] == native.SUPPORTED_MAJOR_VERSION
        assert first.version_string.startswith("5.")

    def test_constant_tables(self, fresh_loader):
        bindings = native.load_bindings()
        assert hasattr(bindings.arm, "ARM_OP_SYSREG")
        assert hasattr(bindings.arm64, "ARM64_OP_BARRIER")

    def test_failure_is_cached(self, fresh_loader, monkeypatch):
        calls = []

        def broken():
            calls.append(1)
            raise NativeLibraryError("failed to load Capstone bindings", reason="libcapstone.so: not found")

        monkeypatch.setattr(native, "_import_bindings", broken)

        with pytest.raises(NativeLibraryError) as first:
            native.load_bindings()
        with pytest.raises(NativeLibraryError) as second:
            native.load_bindings()

        assert len(calls) == 1
        assert str(second.value) == str(first.value)
        assert second.value.reason == "libcapstone.so: not found"

    def test_handle_creation_reports_load_failure(self, fresh_loader, monkeypatch):
        monkeypatch.setitem(sys.modules, "capstone", None)
        with pytest.raises(NativeLibraryError):
            Capstone(CapstoneMode.ARM64)
        # Still an InitializationError for callers that only catch that
        with pytest.raises(InitializationError):
            Capstone(CapstoneMode.ARM32)

    def test_unsupported_version(self, fresh_loader, monkeypatch):
        monkeypatch.setattr(capstone, "cs_version", lambda: (6, 0, 0x600))
        with pytest.raises(NativeLibraryError) as exc_info:
            native.load_bindings()
        assert "found 6.0" in str(exc_info.value)

    def test_missing_architecture(self, fresh_loader, monkeypatch):
        monkeypatch.setattr(capstone, "cs_support", lambda arch: False)
        with pytest.raises(NativeLibraryError) as exc_info:
            native.load_bindings()
        assert exc_info.value.reason == "CS_ARCH_ARM"

    def test_reset_allows_retry(self, fresh_loader, monkeypatch):
        monkeypatch.setattr(capstone, "cs_support", lambda arch: False)
        with pytest.raises(NativeLibraryError):
            native.load_bindings()
        monkeypatch.undo()
        native.reset_bindings()
        assert native.load_bindings().capstone is capstone
