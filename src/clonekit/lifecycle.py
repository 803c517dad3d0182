"""Clone creation, liveness, opening, and teardown.

``CloneManager`` is bound to the project the caller is working in.  Whether
that project is itself a clone is decided once, at construction, and never
re-read: a running process cannot turn its own project into a clone or back.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from pathlib import Path

from clonekit.config import ClonekitConfig
from clonekit.errors import (
    AlreadyExistsError,
    AlreadyOpenError,
    ConfigError,
    DeleteError,
    InvalidPathError,
    NestedCloneError,
    NotFoundError,
    UserCancelled,
)
from clonekit.integrity import validate_folder
from clonekit.log import get_logger
from clonekit.mirror import CopyResult, copy_tree
from clonekit.paths import (
    PACKAGES_DIR,
    ProjectLayout,
    next_clone_path,
    original_project_path,
    same_path,
)
from clonekit.platforms import Platform, select_platform
from clonekit.project_settings import read_company_product, set_company_product
from clonekit.registry import (
    ARGUMENT_FILE_NAME,
    CloneIdentity,
    enumerate_clones,
    is_clone,
    read_identity,
    register,
)

logger = get_logger("lifecycle")

# (subtree label, source file, fraction) -> truthy to cancel.
CreateProgress = Callable[[str, Path, float], "bool | None"]


class CloneManager:
    """Lifecycle operations for the clones of one project."""

    def __init__(
        self,
        project_path: str | os.PathLike,
        *,
        config: ClonekitConfig | None = None,
        platform: Platform | None = None,
    ) -> None:
        self.layout = ProjectLayout.parse(os.path.abspath(os.fspath(project_path)))
        self.config = config or ClonekitConfig()
        self.platform = platform or select_platform()
        self.is_clone = is_clone(self.layout.project_path)

    # -- identity ------------------------------------------------------------

    def current_identity(self) -> CloneIdentity:
        """Identity of the managed project; an original gets a fresh, unlinked one."""
        if self.is_clone:
            return read_identity(self.layout.project_path).refreshed()
        company, product = read_company_product(self.layout.settings_file_path)
        return CloneIdentity(layout=self.layout.with_names(company, product))

    def original_project_path(self) -> str:
        """Path of the original project ("" if a clone's original is gone)."""
        if not self.is_clone:
            return self.layout.project_path
        return original_project_path(self.layout.project_path)

    def clones_root(self) -> str:
        return self.config.clones_root_path or self.layout.root_path

    def next_clone_path(self) -> str | None:
        """First free clone slot under the clones root, or None when all are used."""
        return next_clone_path(self.clones_root(), self.layout.name)

    def clones(self) -> list[CloneIdentity]:
        """Existing clones of the managed (original) project, in slot order."""
        return enumerate_clones(self.layout.name, self.clones_root())

    # -- create --------------------------------------------------------------

    def create(
        self,
        destination: str | os.PathLike,
        link_assets: bool,
        link_settings: bool,
        *,
        progress: CreateProgress | None = None,
    ) -> CloneIdentity:
        """Create a clone of the managed project at *destination*.

        Library and Packages are copied, AutoBuild and LocalPackages linked;
        Assets and ProjectSettings are linked or copied per the two flags.
        Nothing is rolled back on failure or cancellation: call ``delete``
        to clean up a half-built clone.
        """
        if self.is_clone:
            raise NestedCloneError("This project is already a clone. Cannot clone it.")

        dest = os.fspath(destination)
        parent = os.path.dirname(os.path.abspath(dest)) if dest else ""
        if not dest or not os.path.isdir(parent):
            raise InvalidPathError(f"Invalid clone path: {dest!r}")
        if os.path.lexists(dest):
            raise AlreadyExistsError(f"Directory already exists: {dest}")

        source = self.current_identity().layout
        clone = ProjectLayout.parse(
            os.path.abspath(dest), source.company_name, source.product_name,
        )
        logger.info("Cloning %s to %s", source.project_path, clone.project_path)

        logger.debug("Creating project folder %s", clone.project_path)
        os.makedirs(clone.project_path)

        self._mirror("Library", source.library_path, clone.library_path, progress)
        self._mirror("Packages", source.packages_path, clone.packages_path, progress)
        self.platform.link(source.build_output_path, clone.build_output_path)
        self.platform.link(source.local_packages_path, clone.local_packages_path)

        if link_assets:
            self.platform.link(source.asset_path, clone.asset_path)
        else:
            self._mirror("Assets", source.asset_path, clone.asset_path, progress)

        if link_settings:
            self.platform.link(source.settings_path, clone.settings_path)
        else:
            self._mirror("ProjectSettings", source.settings_path, clone.settings_path, progress)

        identity = CloneIdentity(
            layout=clone,
            is_link_asset_folder=link_assets,
            is_link_project_settings_folder=link_settings,
        )
        register(identity)
        return identity

    def _mirror(
        self,
        label: str,
        source: str,
        destination: str,
        progress: CreateProgress | None,
    ) -> CopyResult | None:
        if not os.path.isdir(source):
            logger.warning("%s folder missing in original, creating it empty: %s", label, source)
            os.makedirs(destination, exist_ok=True)
            return None

        def on_progress(path: Path, fraction: float) -> bool | None:
            return progress(label, path, fraction) if progress else None

        result = copy_tree(source, destination, on_progress)
        if result.cancelled:
            raise UserCancelled(f"Copy of {label} cancelled; partial clone left at {destination}")
        return result

    # -- liveness / open -----------------------------------------------------

    def is_running(self, clone_path: str | os.PathLike) -> bool:
        """Advisory: True if an editor appears to have *clone_path* open."""
        return self.platform.is_running(
            clone_path, check_lock_file=self.config.editor_check_lock_file,
        )

    def open(self, clone_path: str | os.PathLike) -> None:
        """Launch a new editor process on *clone_path*.

        The clone's package cache is made consistent with the original first
        so both editors compile against the same packages.
        """
        path = os.fspath(clone_path)
        if not os.path.isdir(path):
            raise NotFoundError(f"Cannot open the project, folder does not exist: {path}")
        if same_path(path, self.layout.project_path):
            raise AlreadyOpenError(f"Cannot open the project, it is already open: {path}")
        if not self.config.editor_path:
            raise ConfigError("No editor configured; set editor_path with 'clonekit config'")

        original = self.original_project_path()
        if original and not same_path(path, original):
            validate_folder(path, original, PACKAGES_DIR)

        self.platform.open_project(self.config.editor_path, path)

    # -- delete --------------------------------------------------------------

    def delete(self, clone_path: str | os.PathLike) -> bool:
        """Remove the clone at *clone_path*.

        The argument file goes first so nothing keeps reading or writing it
        while the tree is removed.  Returns False if there was nothing left
        to delete.
        """
        if self.is_clone:
            raise NestedCloneError("A clone cannot delete clones.")
        path = os.fspath(clone_path)
        if not path:
            raise InvalidPathError("Clone path is empty")
        original = self.original_project_path()
        if same_path(path, original) or Path(original).resolve().is_relative_to(Path(path).resolve()):
            raise InvalidPathError(
                f"Refusing to delete the original project or a folder containing it: {path}"
            )
        if not os.path.lexists(path):
            logger.debug("Nothing to delete at %s", path)
            return False

        logger.info("Deleting clone %s", path)
        try:
            arg_file = Path(path) / ARGUMENT_FILE_NAME
            if arg_file.exists():
                arg_file.unlink()
            if self.platform.is_link(path):
                self.platform.unlink(path)
                return True
            with os.scandir(path) as it:
                links = [entry.path for entry in it if self.platform.is_link(entry.path)]
            for link in links:
                logger.debug("Removing link %s", link)
                self.platform.unlink(link)
            shutil.rmtree(path)
        except OSError as e:
            raise DeleteError(f"Could not fully delete {path}: {e}") from e
        return True

    # -- persistent data -----------------------------------------------------

    def persistent_data_path(self, identity: CloneIdentity) -> Path:
        """Where the editor keeps per-product data for *identity*."""
        layout = identity.layout
        return self.platform.persistent_data_root() / layout.company_name / layout.product_name

    def set_company_product(self, clone_path: str | os.PathLike, company: str, product: str) -> CloneIdentity:
        """Rename company/product in a clone's own settings file."""
        identity = read_identity(clone_path)
        if identity.is_link_project_settings_folder:
            raise InvalidPathError(
                "Project settings are linked to the original; company and product "
                "names can only be changed there"
            )
        settings_file = identity.layout.settings_file_path
        if not os.path.isfile(settings_file):
            raise NotFoundError(f"Settings file does not exist: {settings_file}")
        set_company_product(settings_file, company, product)
        return identity.refreshed()
