"""Errors raised by gtmpl."""

from __future__ import annotations

from typing import List, Optional


class GtmplError(Exception):
    """Base class for every error gtmpl reports to the user"""


class IOFailure(GtmplError):
    """Raise when reading or writing a file on disk fails"""


class PersistError(IOFailure):
    """Raise when a properties file cannot be written"""


class PropertiesVersionError(GtmplError):
    """Raise when a properties file has no readable version header"""


class SettingsError(GtmplError):
    """Raise when the settings file is malformed or a key is unknown"""


class InvalidTemplateLocation(GtmplError):
    """Raise when a template location is not an absolute URI"""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class TemplateNotFound(GtmplError):
    """Raise when a template name is not in the registry"""

    def __init__(self, name: str, suggestions: Optional[List[str]] = None) -> None:
        self.name = name
        self.suggestions = list(suggestions or [])
        message = f"cannot find a Gauge template '{name}'"
        if self.suggestions:
            message += ".\nThe most similar template names are\n\n\t" + "\n\t".join(
                self.suggestions
            )
        super().__init__(message)


class UnknownTemplate(GtmplError):
    """Raise when project initialization is asked for a template that does not exist"""

    def __init__(self, cause: TemplateNotFound) -> None:
        super().__init__(f"failed to initialize project. {cause}")
        self.name = cause.name
        self.suggestions = cause.suggestions


class AlreadyAProject(GtmplError):
    """Raise when the target directory already holds a Gauge project"""


class InsecureDownloadRejected(GtmplError):
    """Raise when a template URL is not https and insecure downloads are off"""


class DownloadOrExtractFailed(GtmplError):
    """Raise when a template archive cannot be fetched or unpacked"""


class MalformedTemplate(GtmplError):
    """Raise when an archive has no directory containing a manifest"""


class MetadataParseError(GtmplError):
    """Raise when the template metadata file is missing or is not valid JSON"""


class PostInstallFailed(GtmplError):
    """Raise when the template's post install command fails"""
