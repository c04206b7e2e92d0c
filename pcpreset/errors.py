class ScaffoldError(Exception):
    """Base class for errors that abort project scaffolding."""


class ConfigurationError(ScaffoldError):
    """The template registry or another config value is unusable."""


class FetchError(ScaffoldError):
    """Downloading or unpacking the template repository failed."""


class RewriteReadError(ScaffoldError):
    """A template file that needs rewriting is missing or unreadable."""


class RewriteParseError(ScaffoldError):
    """The template manifest is not a valid JSON object."""


class RenameError(ScaffoldError):
    """The staging directory could not be renamed to the project directory."""


class EditorLaunchError(ScaffoldError):
    """The external editor could not be started."""


__all__ = [
    "ScaffoldError",
    "ConfigurationError",
    "FetchError",
    "RewriteReadError",
    "RewriteParseError",
    "RenameError",
    "EditorLaunchError",
]
