"""clonekit error hierarchy."""


class ClonekitError(Exception):
    """Base exception for all clonekit errors."""


class ConfigError(ClonekitError):
    """Preferences file missing, malformed, or lacking a required value."""


class InvalidPathError(ClonekitError):
    """Path is empty, malformed, or not allowed for the requested operation."""


class AlreadyExistsError(ClonekitError):
    """Destination path already exists."""


class NotFoundError(ClonekitError):
    """Path or control file does not exist."""


class AlreadyOpenError(ClonekitError):
    """Project is the one currently being managed."""


class NestedCloneError(ClonekitError):
    """Operation is forbidden when invoked from inside a clone."""


class SelfCopyError(ClonekitError):
    """A directory cannot be copied into itself."""


class LinkError(ClonekitError):
    """Creating or removing a directory link failed."""


class DeleteError(ClonekitError):
    """A clone directory could not be fully removed."""


class RegistryError(ClonekitError):
    """Identity marker is unreadable or malformed."""


class PlatformUnsupportedError(ClonekitError):
    """Running on an operating system clonekit does not know about."""


class UserCancelled(ClonekitError):
    """User cancelled an interactive prompt or a running copy."""
