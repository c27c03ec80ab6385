"""Error taxonomy for loader registration and stylesheet builds."""


class RockLoadersError(Exception):
    """Base class for all rockloaders errors."""


class InvalidPath(RockLoadersError):
    """A loader path cannot be turned into a root-relative base path."""

    def __init__(self, key: str, path: str, reason: str):
        self.key = key
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve loader '{key}' at '{path}': {reason}")


class CompileError(RockLoadersError):
    """The style compiler rejected the assembled source document."""


class CacheUnavailable(RockLoadersError):
    """The fingerprint store could not be read or written."""


class ArtifactWriteError(RockLoadersError):
    """The compiled stylesheet could not be written to disk."""


class ConfigError(RockLoadersError):
    """The project configuration file is unreadable or malformed."""


class FragmentReadError(RockLoadersError):
    """A style or markup fragment exists but cannot be read as UTF-8 text."""
