"""Tests for gvm.platform.detection module."""

from gvm.platform.detection import Arch, Platform, PlatformInfo, detect


class TestPlatform:
    def test_goos_names(self) -> None:
        assert Platform.LINUX.goos == "linux"
        assert Platform.MACOS.goos == "darwin"
        assert Platform.WINDOWS.goos == "windows"

    def test_str(self) -> None:
        assert str(Platform.MACOS) == "macos"


class TestArch:
    def test_goarch_names(self) -> None:
        assert Arch.X64.goarch == "amd64"
        assert Arch.ARM64.goarch == "arm64"
        assert Arch.X86.goarch == "386"

    def test_unknown_has_no_goarch(self) -> None:
        assert Arch.UNKNOWN.goarch is None


class TestPlatformInfo:
    def test_str(self) -> None:
        assert str(PlatformInfo(Platform.LINUX, Arch.X64)) == "linux-x64"

    def test_is_windows(self) -> None:
        assert PlatformInfo(Platform.WINDOWS, Arch.X64).is_windows
        assert not PlatformInfo(Platform.LINUX, Arch.X64).is_windows

    def test_detect_is_cached(self) -> None:
        assert detect() is detect()
