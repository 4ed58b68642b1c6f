"""Tests for the registry scanner."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from zlaunch.exceptions import RegistryUnavailableError
from zlaunch.models.session import Endpoint
from zlaunch.services.registry import list_endpoints


class TestListEndpoints:
    """Tests for list_endpoints."""

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        """A registry directory that does not exist means no sessions."""
        assert list_endpoints(tmp_path / "does-not-exist") == []

    def test_empty_directory(self, socket_dir: Path) -> None:
        """An empty directory yields no endpoints."""
        assert list_endpoints(socket_dir) == []

    def test_only_sockets_are_listed(
        self, socket_dir: Path, stale_socket: Callable[[str], Path]
    ) -> None:
        """Regular files and subdirectories are skipped."""
        stale_socket("work")
        (socket_dir / "notes.txt").write_text("not a socket")
        (socket_dir / "subdir").mkdir()

        endpoints = list_endpoints(socket_dir)

        assert endpoints == [Endpoint(name="work", path=socket_dir / "work")]

    def test_symlink_to_socket_is_skipped(
        self, socket_dir: Path, stale_socket: Callable[[str], Path]
    ) -> None:
        """Symlinks are not followed, so only the real socket is listed."""
        target = stale_socket("real")
        (socket_dir / "alias").symlink_to(target)

        names = [endpoint.name for endpoint in list_endpoints(socket_dir)]

        assert names == ["real"]

    def test_scan_does_not_modify_directory(
        self, socket_dir: Path, stale_socket: Callable[[str], Path]
    ) -> None:
        """Scanning is read-only, even for sockets nobody listens on."""
        path = stale_socket("old")
        list_endpoints(socket_dir)
        assert path.exists()

    def test_not_a_directory_is_unavailable(self, tmp_path: Path) -> None:
        """A path that exists but cannot be listed is a fatal registry error."""
        registry = tmp_path / "registry"
        registry.write_text("oops")

        with pytest.raises(RegistryUnavailableError, match="Cannot read session directory"):
            list_endpoints(registry)

    def test_other_os_errors_are_unavailable(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Errors other than absence surface as RegistryUnavailableError."""
        registry = tmp_path / "registry"
        registry.mkdir()
        real_scandir = os.scandir

        def fake_scandir(path: object) -> object:
            if Path(str(path)) == registry:
                raise PermissionError(13, "Permission denied")
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)

        with pytest.raises(RegistryUnavailableError):
            list_endpoints(registry)
