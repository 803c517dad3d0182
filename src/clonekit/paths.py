"""Project layout parsing, clone path derivation, and XDG resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from clonekit.errors import InvalidPathError

CLONE_NAME_SUFFIX = "_clone"
MAX_CLONES = 16

# Fixed subtree names relative to the project root.
ASSETS_DIR = "Assets"
SETTINGS_DIR = "ProjectSettings"
SETTINGS_FILE = "ProjectSettings/ProjectSettings.asset"
LIBRARY_DIR = "Library"
PACKAGES_DIR = "Packages"
BUILD_OUTPUT_DIR = "AutoBuild"
LOCAL_PACKAGES_DIR = "LocalPackages"

_SEPARATOR = "/"


@dataclass(frozen=True)
class ProjectLayout:
    """Canonical subtree paths of one project.

    All paths are ``/``-separated strings derived from *project_path*;
    *company_name* and *product_name* come from the settings file.
    """

    name: str
    root_path: str
    project_path: str
    asset_path: str
    settings_path: str
    settings_file_path: str
    library_path: str
    packages_path: str
    build_output_path: str
    local_packages_path: str
    company_name: str = ""
    product_name: str = ""

    @classmethod
    def parse(
        cls,
        path: str | os.PathLike,
        company_name: str = "",
        product_name: str = "",
    ) -> ProjectLayout:
        """Split *path* into project name and parent, and derive every subtree.

        Raises ``InvalidPathError`` if *path* is empty or has no parent segment.
        """
        project_path = os.fspath(path).replace("\\", _SEPARATOR)
        if len(project_path) > 1:
            project_path = project_path.rstrip(_SEPARATOR)
        if not project_path:
            raise InvalidPathError("Project path is empty")

        segments = project_path.split(_SEPARATOR)
        name = segments[-1]
        if len(segments) < 2 or not name:
            raise InvalidPathError(f"Project path has no parent directory: {path}")
        root_path = _SEPARATOR.join(segments[:-1])

        def sub(suffix: str) -> str:
            return project_path + _SEPARATOR + suffix

        return cls(
            name=name,
            root_path=root_path,
            project_path=project_path,
            asset_path=sub(ASSETS_DIR),
            settings_path=sub(SETTINGS_DIR),
            settings_file_path=sub(SETTINGS_FILE),
            library_path=sub(LIBRARY_DIR),
            packages_path=sub(PACKAGES_DIR),
            build_output_path=sub(BUILD_OUTPUT_DIR),
            local_packages_path=sub(LOCAL_PACKAGES_DIR),
            company_name=company_name,
            product_name=product_name,
        )

    def with_names(self, company_name: str, product_name: str) -> ProjectLayout:
        """Return a copy carrying different company/product names."""
        return replace(self, company_name=company_name, product_name=product_name)

    def __str__(self) -> str:
        return self.project_path


def derive_clone_path(root_path: str | os.PathLike, base_name: str, index: int) -> str:
    """Deterministic path of clone slot *index*: ``{root}/{base}_clone_{index}``."""
    root = os.fspath(root_path).replace("\\", _SEPARATOR).rstrip(_SEPARATOR)
    return f"{root}{_SEPARATOR}{base_name}{CLONE_NAME_SUFFIX}_{index}"


def candidate_clone_paths(root_path: str | os.PathLike, base_name: str) -> list[str]:
    """All ``MAX_CLONES`` slot paths for *base_name*, in index order."""
    return [derive_clone_path(root_path, base_name, i) for i in range(MAX_CLONES)]


def next_clone_path(root_path: str | os.PathLike, base_name: str) -> str | None:
    """First slot path that does not exist yet, or None when every slot is taken."""
    for candidate in candidate_clone_paths(root_path, base_name):
        if not os.path.lexists(candidate):
            return candidate
    return None


def original_project_path(clone_path: str | os.PathLike) -> str:
    """Recover the original project's path from a clone's path.

    Everything from the last ``_clone`` onward is stripped; the result is
    returned only if that directory exists, otherwise ``""``.
    """
    path = os.fspath(clone_path).replace("\\", _SEPARATOR)
    index = path.rfind(CLONE_NAME_SUFFIX)
    if index > 0:
        candidate = path[:index]
        if os.path.isdir(candidate):
            return candidate
    return ""


def same_path(a: str | os.PathLike, b: str | os.PathLike, *, ignore_case: bool = False) -> bool:
    """Compare two paths after normalisation.

    Case is folded only where the OS does so (``os.path.normcase``) or when
    *ignore_case* is set.
    """
    def norm(p: str | os.PathLike) -> str:
        text = os.path.normcase(os.path.normpath(os.path.abspath(os.fspath(p))))
        text = text.replace("\\", _SEPARATOR)
        return text.lower() if ignore_case else text
    return norm(a) == norm(b)


def xdg(env_var: str, default_suffix: str) -> Path:
    """Resolve an XDG directory from environment or default under $HOME."""
    val = os.environ.get(env_var, "")
    if val:
        return Path(val).resolve()
    return Path.home() / default_suffix
