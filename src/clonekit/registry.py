"""Clone identity markers, argument files, and clone enumeration.

A clone is recognised by the identity marker at its root::

    {clone}/
        .clone              ← JSON snapshot of the layout + link policy
        .clonearg           ← free-form argument, read by code in the clone
        .gitignore          ← "*", keeps version control out of the clone
        collabignore.txt    ← "*", same for collaboration tooling

The marker's file name must never change once clones exist, or they lose
their identity.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from clonekit.errors import NotFoundError, RegistryError
from clonekit.log import get_logger
from clonekit.paths import ProjectLayout, candidate_clone_paths
from clonekit.project_settings import read_company_product

logger = get_logger("registry")

CLONE_FILE_NAME = ".clone"
ARGUMENT_FILE_NAME = ".clonearg"
DEFAULT_ARGUMENT = "client"
IGNORE_FILE_NAMES = (".gitignore", "collabignore.txt")
_IGNORE_CONTENT = "*"

# Keys used by markers written before the snake_case format.
_LEGACY_KEYS = {
    "Name": "name",
    "ProjectPath": "project_path",
    "RootPath": "root_path",
    "AssetPath": "asset_path",
    "ProjectSettingsPath": "settings_path",
    "ProjectSettingsAssetPath": "settings_file_path",
    "LibraryPath": "library_path",
    "PackagesPath": "packages_path",
    "AutoBuildPath": "build_output_path",
    "LocalPackages": "local_packages_path",
    "CompanyName": "company_name",
    "ProductName": "product_name",
    "IsLinkAssetFolder": "is_link_asset_folder",
    "IsLinkProjectSettingsFolder": "is_link_project_settings_folder",
}


@dataclass(frozen=True)
class CloneIdentity:
    """What a clone knows about itself: its layout and how it shares with the original."""

    layout: ProjectLayout
    is_link_asset_folder: bool = False
    is_link_project_settings_folder: bool = False

    @property
    def project_path(self) -> str:
        return self.layout.project_path

    def to_dict(self) -> dict:
        data = asdict(self.layout)
        data["is_link_asset_folder"] = self.is_link_asset_folder
        data["is_link_project_settings_folder"] = self.is_link_project_settings_folder
        return data

    @classmethod
    def from_dict(cls, data: dict) -> CloneIdentity:
        """Rebuild an identity; missing layout paths are re-derived from ``project_path``.

        PascalCase keys from older markers are accepted as aliases.
        """
        data = {_LEGACY_KEYS.get(k, k): v for k, v in data.items()}
        try:
            layout = ProjectLayout.parse(data["project_path"])
        except KeyError as e:
            raise RegistryError("Identity marker has no project_path") from e
        stored = {
            fld.name: str(data[fld.name])
            for fld in fields(ProjectLayout)
            if fld.name in data and data[fld.name] is not None
        }
        layout = ProjectLayout(**{**asdict(layout), **stored})
        return cls(
            layout=layout,
            is_link_asset_folder=bool(data.get("is_link_asset_folder", False)),
            is_link_project_settings_folder=bool(data.get("is_link_project_settings_folder", False)),
        )

    def refreshed(self) -> CloneIdentity:
        """Re-read company/product from the clone's own settings file.

        Linked settings belong to the original and are not re-read.
        """
        if self.is_link_project_settings_folder:
            return self
        if not os.path.isfile(self.layout.settings_file_path):
            return self
        company, product = read_company_product(self.layout.settings_file_path)
        return CloneIdentity(
            layout=self.layout.with_names(company, product),
            is_link_asset_folder=self.is_link_asset_folder,
            is_link_project_settings_folder=self.is_link_project_settings_folder,
        )


def _write_atomic(path: Path, text: str) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        if tmp_path.exists():
            tmp_path.unlink()
        raise


def register(identity: CloneIdentity) -> None:
    """Stamp ``identity.project_path`` as a clone.

    Must run last, after every subtree is in place: the marker is what makes
    the directory a usable clone, so it is written after the other files.
    """
    root = Path(identity.project_path)
    if not root.is_dir():
        raise NotFoundError(f"Clone directory does not exist: {root}")

    (root / ARGUMENT_FILE_NAME).write_text(DEFAULT_ARGUMENT, encoding="utf-8")
    for name in IGNORE_FILE_NAMES:
        (root / name).write_text(_IGNORE_CONTENT)
    _write_atomic(root / CLONE_FILE_NAME, json.dumps(identity.to_dict(), indent=2) + "\n")
    logger.debug("Registered clone at %s", root)


def is_clone(path: str | os.PathLike) -> bool:
    """True if *path* carries an identity marker."""
    return (Path(path) / CLONE_FILE_NAME).is_file()


def read_identity(path: str | os.PathLike) -> CloneIdentity:
    """Load the identity marker at *path*."""
    marker = Path(path) / CLONE_FILE_NAME
    try:
        data = json.loads(marker.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise NotFoundError(f"Not a clone (no {CLONE_FILE_NAME}): {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise RegistryError(f"Unreadable identity marker {marker}: {e}") from e
    if not isinstance(data, dict):
        raise RegistryError(f"Identity marker {marker} is not a JSON object")
    return CloneIdentity.from_dict(data)


def enumerate_clones(name: str, clones_root: str | os.PathLike) -> list[CloneIdentity]:
    """Identities of every existing clone slot for project *name*, in index order."""
    clones: list[CloneIdentity] = []
    for candidate in candidate_clone_paths(clones_root, name):
        if not is_clone(candidate):
            continue
        try:
            identity = read_identity(candidate)
        except RegistryError as e:
            logger.warning("Ignoring clone slot %s: %s", candidate, e)
            continue
        clones.append(identity.refreshed())
    return clones


def get_argument(path: str | os.PathLike) -> str:
    """Argument of the clone at *path*, or ``""`` when there is none."""
    try:
        return (Path(path) / ARGUMENT_FILE_NAME).read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def set_argument(path: str | os.PathLike, value: str) -> None:
    """Replace the argument of the clone at *path*.

    Only an existing argument file is rewritten: a clone being deleted has
    already lost it, and it must not come back.
    """
    arg_file = Path(path) / ARGUMENT_FILE_NAME
    if not arg_file.is_file():
        raise NotFoundError(f"No argument file found: {arg_file}")
    arg_file.write_text(value, encoding="utf-8")
