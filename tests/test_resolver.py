"""
Tests for runtime sidecar resolution.

Covers the write-once cell, resource directory handles, file validation
and the SidecarResolver state machine.
"""

import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

import pytest

from hledger_sidecar.sidecar import resolver as resolver_module
from hledger_sidecar.sidecar.naming import sidecar_name
from hledger_sidecar.sidecar.once import SetOnce
from hledger_sidecar.sidecar.resolver import SidecarResolver, is_usable_sidecar
from hledger_sidecar.sidecar.resources import BundleAppHandle, ResourceDirUnavailable


class FakeApp:
    """App handle returning a fixed directory, or failing."""

    def __init__(self, resource_dir=None, error=None):
        self._resource_dir = resource_dir
        self._error = error
        self.calls = 0

    def resource_dir(self) -> Path:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._resource_dir


def make_resources(root: Path, size: int) -> Path:
    """Create a resource directory holding a sidecar of ``size`` bytes."""
    root.mkdir(parents=True, exist_ok=True)
    (root / sidecar_name()).write_bytes(b"x" * size)
    return root


@pytest.fixture
def default_resolver(monkeypatch):
    """Fresh process-wide resolver for tests of the module functions."""
    fresh = SidecarResolver()
    monkeypatch.setattr(resolver_module, "_default_resolver", fresh)
    return fresh


# ==================== SetOnce Tests ====================

class TestSetOnce:
    """Tests for the write-once cell."""

    def test_starts_empty(self):
        cell = SetOnce()
        assert cell.is_set is False
        assert cell.get() is None

    def test_first_set_wins(self):
        cell = SetOnce()
        assert cell.set("first") is True
        assert cell.set("second") is False
        assert cell.get() == "first"

    def test_get_or_init_calls_factory_once(self):
        cell = SetOnce()
        calls = []

        def factory():
            calls.append(1)
            return "value"

        assert cell.get_or_init(factory) == "value"
        assert cell.get_or_init(factory) == "value"
        assert len(calls) == 1

    def test_racing_writers_store_one_value(self):
        cell = SetOnce()
        barrier = threading.Barrier(8)

        def write(i):
            barrier.wait()
            return cell.set(i)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(write, range(8)))

        assert results.count(True) == 1
        assert cell.get() == results.index(True)


# ==================== Resource Directory Tests ====================

class TestBundleAppHandle:
    """Tests for BundleAppHandle.resource_dir()."""

    def test_explicit_directory(self, tmp_path):
        assert BundleAppHandle(str(tmp_path)).resource_dir() == tmp_path

    def test_frozen_bundle_uses_meipass(self, monkeypatch, tmp_path):
        monkeypatch.setattr(sys, "frozen", True, raising=False)
        monkeypatch.setattr(sys, "_MEIPASS", str(tmp_path), raising=False)
        assert BundleAppHandle().resource_dir() == tmp_path

    def test_source_checkout_is_unavailable(self, monkeypatch):
        monkeypatch.delattr(sys, "frozen", raising=False)
        with pytest.raises(ResourceDirUnavailable):
            BundleAppHandle().resource_dir()


# ==================== Validation Tests ====================

class TestIsUsableSidecar:
    """Tests for is_usable_sidecar()."""

    def test_non_empty_file(self, tmp_path):
        path = tmp_path / "hledger"
        path.write_bytes(b"binary")
        assert is_usable_sidecar(path) is True

    def test_empty_placeholder_rejected(self, tmp_path):
        path = tmp_path / "hledger"
        path.write_bytes(b"")
        assert is_usable_sidecar(path) is False

    def test_directory_rejected(self, tmp_path):
        path = tmp_path / "hledger"
        path.mkdir()
        assert is_usable_sidecar(path) is False

    def test_missing_rejected(self, tmp_path):
        assert is_usable_sidecar(tmp_path / "hledger") is False


class TestSidecarName:
    """Tests for the runtime sidecar filename."""

    def test_windows(self):
        with patch.object(sys, "platform", "win32"):
            assert sidecar_name() == "hledger.exe"

    def test_other_platforms(self):
        with patch.object(sys, "platform", "darwin"):
            assert sidecar_name() == "hledger"


# ==================== SidecarResolver Tests ====================

class TestSidecarResolver:
    """Tests for SidecarResolver initialization and lookup."""

    def test_bundled_binary_resolved(self, tmp_path):
        resources = make_resources(tmp_path / "app" / "resources", 2048)
        resolver = SidecarResolver()

        assert resolver.init_from_app(FakeApp(resources)) is True
        assert resolver.is_resolved
        assert resolver.path() == str(resources / sidecar_name())

    def test_placeholder_falls_back(self, tmp_path):
        resources = make_resources(tmp_path / "app" / "resources", 0)
        resolver = SidecarResolver()

        assert resolver.init_from_app(FakeApp(resources)) is False
        assert resolver.resolved is None
        assert resolver.path() == "hledger"

    def test_directory_candidate_falls_back(self, tmp_path):
        (tmp_path / sidecar_name()).mkdir()
        resolver = SidecarResolver()

        assert resolver.init_from_app(FakeApp(tmp_path)) is False
        assert resolver.path() == "hledger"

    def test_missing_binary_falls_back(self, tmp_path):
        resolver = SidecarResolver()
        assert resolver.init_from_app(FakeApp(tmp_path)) is False
        assert resolver.path() == "hledger"

    @pytest.mark.parametrize("error", [
        OSError("no resource dir"),
        ResourceDirUnavailable("not bundled"),
        RuntimeError("unknown"),
    ])
    def test_resource_dir_failure_falls_back(self, error):
        resolver = SidecarResolver()
        app = FakeApp(error=error)

        assert resolver.init_from_app(app) is False
        assert app.calls == 1
        assert resolver.path() == "hledger"

    def test_relative_resource_dir_stored_absolute(self, tmp_path, monkeypatch):
        make_resources(tmp_path, 2048)
        monkeypatch.chdir(tmp_path)
        resolver = SidecarResolver()

        assert resolver.init_from_app(BundleAppHandle(".")) is True
        assert os.path.isabs(resolver.path())
        assert resolver.path() == os.path.join(os.getcwd(), sidecar_name())

    def test_none_resource_dir_falls_back(self):
        """A handle returning None is treated like a failed lookup."""
        resolver = SidecarResolver()

        assert resolver.init_from_app(FakeApp(None)) is False
        assert resolver.path() == "hledger"

    def test_first_write_wins(self, tmp_path):
        first = make_resources(tmp_path / "first", 10)
        second = make_resources(tmp_path / "second", 20)
        resolver = SidecarResolver()

        assert resolver.init_from_app(FakeApp(first)) is True
        assert resolver.init_from_app(FakeApp(second)) is False
        assert resolver.path() == str(first / sidecar_name())

    def test_failed_init_keeps_earlier_resolution(self, tmp_path):
        resources = make_resources(tmp_path / "resources", 10)
        resolver = SidecarResolver()
        resolver.init_from_app(FakeApp(resources))

        resolver.init_from_app(FakeApp(error=OSError("gone")))
        assert resolver.path() == str(resources / sidecar_name())

    def test_fallback_is_stable(self):
        resolver = SidecarResolver()
        first = resolver.path()

        assert first == "hledger"
        assert all(resolver.path() is first for _ in range(5))

    def test_resolution_after_fallback_was_read(self, tmp_path):
        """Reading the fallback early does not block a later resolution."""
        resources = make_resources(tmp_path / "resources", 10)
        resolver = SidecarResolver()

        assert resolver.path() == "hledger"
        assert resolver.init_from_app(FakeApp(resources)) is True
        assert resolver.path() == str(resources / sidecar_name())

    def test_concurrent_init_and_reads(self, tmp_path):
        dirs = [make_resources(tmp_path / f"res{i}", 10 + i) for i in range(6)]
        resolver = SidecarResolver()
        barrier = threading.Barrier(len(dirs))

        def init(d):
            barrier.wait()
            return resolver.init_from_app(FakeApp(d))

        with ThreadPoolExecutor(max_workers=len(dirs)) as pool:
            results = list(pool.map(init, dirs))

        assert results.count(True) == 1
        winner = dirs[results.index(True)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            seen = set(pool.map(lambda _: resolver.path(), range(50)))
        assert seen == {str(winner / sidecar_name())}


# ==================== Module Function Tests ====================

class TestProcessWideResolver:
    """Tests for init_from_app() / hledger_path()."""

    def test_unresolved_returns_bare_name(self, default_resolver):
        assert resolver_module.hledger_path() == "hledger"
        assert resolver_module.get_resolver() is default_resolver

    def test_init_then_lookup(self, default_resolver, tmp_path):
        resources = make_resources(tmp_path / "resources", 2048)

        assert resolver_module.init_from_app(BundleAppHandle(resources)) is True
        assert resolver_module.hledger_path() == os.path.join(str(resources), sidecar_name())

    def test_package_exports(self, default_resolver):
        import hledger_sidecar

        assert hledger_sidecar.hledger_path() == "hledger"
