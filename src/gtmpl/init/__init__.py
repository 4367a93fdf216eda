"""Project initialization from templates."""

from .archive import download_and_unzip, unzip_local
from .project import InitContext, from_template, from_url, from_zip_file

__all__ = [
    "InitContext",
    "download_and_unzip",
    "from_template",
    "from_url",
    "from_zip_file",
    "unzip_local",
]
