"""Error taxonomy for project and document operations"""


class ProjectError(Exception):
    """Base class; str(error) is the human-readable message returned to callers."""


class ProjectValidationError(ProjectError, ValueError):
    """Missing/blank input, bad path, or a project that already exists."""


class ProjectStorageError(ProjectError):
    """A read, write, or directory creation failed."""


class ProjectParseError(ProjectError):
    """A metadata, site, or sitemap file could not be parsed."""


class RemoteServerError(ProjectError):
    """The remote listener could not be started."""
