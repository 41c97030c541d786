from __future__ import annotations


class BuildError(Exception):
    """Base class for errors that abort a build."""


class FrontMatterError(BuildError):
    pass


class TemplateNotFoundError(BuildError):
    pass


class ManifestError(BuildError):
    pass
