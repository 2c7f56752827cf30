import logging

import pytest

from nix8820.disk.errors import raise_disk_error
from nix8820.exceptions import (
    ConfigurationError,
    DirectoryError,
    DiskImageError,
    LabelError,
    Nix8820Error,
    ParseError,
)


class TestNix8820Error:
    def test_message_without_context(self):
        assert str(Nix8820Error("boom")) == "boom"

    def test_message_with_context(self):
        err = Nix8820Error("boom", context={"offset": 4096, "label": "VOL1"})
        assert str(err) == "boom (Context: offset=4096, label=VOL1)"

    def test_long_context_values_truncated(self):
        err = Nix8820Error("boom", context={"path": "x" * 80})
        assert "x" * 47 + "..." in str(err)
        assert "x" * 48 not in str(err)

    def test_add_and_get_context(self):
        err = Nix8820Error("boom")
        err.add_context("variant", "stream")
        assert err.get_context("variant") == "stream"
        assert err.get_context("missing", 7) == 7

    def test_repr_includes_context(self):
        err = Nix8820Error("boom", context={"a": 1})
        assert "context={'a': 1}" in repr(err)

    def test_original_exception(self):
        cause = OSError("nope")
        err = Nix8820Error("boom", original_exception=cause)
        assert err.original_exception is cause

    @pytest.mark.parametrize(
        "exc_type",
        [ParseError, ConfigurationError, DiskImageError, LabelError, DirectoryError],
    )
    def test_hierarchy(self, exc_type):
        assert issubclass(exc_type, Nix8820Error)


class TestRaiseDiskError:
    def test_raises_with_context_and_logs(self, caplog):
        caplog.set_level(logging.ERROR, logger="nix8820.disk.errors")
        with pytest.raises(LabelError) as exc_info:
            raise_disk_error(LabelError, "VOL1 not found", {"pos": (0, 0, 7)})
        assert exc_info.value.get_context("pos") == (0, 0, 7)
        assert any("VOL1 not found" in rec.getMessage() for rec in caplog.records)

    def test_chains_original_exception(self):
        cause = OSError("permission denied")
        with pytest.raises(DiskImageError) as exc_info:
            raise_disk_error(DiskImageError, "Can't read disk image", exc=cause)
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.original_exception is cause
        assert "permission denied" in str(exc_info.value)
