"""Shared fixtures for clonekit tests."""

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from clonekit.config import ClonekitConfig
from clonekit.lifecycle import CloneManager
from clonekit.platforms import LinuxPlatform

SETTINGS_TEXT = (
    "%YAML 1.1\n"
    "PlayerSettings:\n"
    "  productGUID: 0123456789abcdef\n"
    "  companyName: Acme\n"
    "  productName: Rocket\n"
    "  defaultScreenWidth: 1024\n"
)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers main() attaches so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("clonekit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def tmp_home(tmp_path, monkeypatch):
    """Set HOME and XDG dirs to an isolated temp tree."""
    home = tmp_path / "home"
    home.mkdir()
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return tmp_path


def build_project(root: Path, name: str = "Game") -> Path:
    """Create a minimal project tree under *root* and return its path."""
    project = root / name
    (project / "Assets" / "Scenes").mkdir(parents=True)
    (project / "Assets" / "Scenes" / "Main.unity").write_text("scene")
    (project / "Assets" / "player.png").write_bytes(b"\x89PNG" + b"\0" * 60)
    (project / "ProjectSettings").mkdir()
    (project / "ProjectSettings" / "ProjectSettings.asset").write_text(SETTINGS_TEXT)
    (project / "Library" / "ScriptAssemblies").mkdir(parents=True)
    (project / "Library" / "ScriptAssemblies" / "Game.dll").write_bytes(b"x" * 300)
    (project / "Library" / "ArtifactDB").write_bytes(b"y" * 100)
    (project / "Packages").mkdir()
    (project / "Packages" / "manifest.json").write_text('{"dependencies": {}}\n')
    (project / "AutoBuild").mkdir()
    (project / "AutoBuild" / "build.log").write_text("ok\n")
    (project / "LocalPackages").mkdir()
    (project / "LocalPackages" / "tool.txt").write_text("tool\n")
    return project


@pytest.fixture
def project(tmp_path):
    """An original project at ``tmp_path/p/Game``."""
    root = tmp_path / "p"
    root.mkdir()
    return build_project(root)


@pytest.fixture
def manager(project):
    """CloneManager for the sample project on the Linux platform."""
    return CloneManager(project, config=ClonekitConfig(), platform=LinuxPlatform())


@pytest.fixture
def clone_env(manager, project):
    """An original project plus one clone (assets linked, settings copied)."""
    clone_path = project.parent / "Game_clone_0"
    identity = manager.create(clone_path, link_assets=True, link_settings=False)
    return SimpleNamespace(
        manager=manager, project=project, clone_path=clone_path, identity=identity,
    )
