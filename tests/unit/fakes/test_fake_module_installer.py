"""Tests for FakeModuleInstaller (Layer 1: Fake Infrastructure Tests)."""

from pathlib import Path

from tests.fakes.module_installer import FakeModuleInstaller


def test_successful_install_marks_module_installed() -> None:
    fake = FakeModuleInstaller()

    assert not fake.is_installed("beeware", Path("/repo"))
    assert fake.install("beeware", Path("/repo"))
    assert fake.is_installed("beeware", Path("/repo"))
    assert fake.install_calls == [("beeware", Path("/repo"))]


def test_failed_install_leaves_module_missing() -> None:
    fake = FakeModuleInstaller(install_succeeds=False)

    assert not fake.install("beeware", Path("/repo"))
    assert not fake.is_installed("beeware", Path("/repo"))
