"""
Object naming helpers.

Conventions:
    - Folder: {path}/ when the file has a path, else {related[0].ref}/ when
      the first related entity has a ref, else {hash}/
    - Object: {folder}{hash}{suffix}{ext}, ext lowercased
    - Public URL: {public_base_url}/{object}
"""

from .models import UploadFile


def folder_for(file: UploadFile) -> str:
    """Return the folder prefix (with trailing slash) for a file."""
    if file.path:
        return f"{file.path}/"
    if file.related and file.related[0].ref:
        return f"{file.related[0].ref}/"
    return f"{file.hash}/"


def file_name(file: UploadFile, suffix: str = "") -> str:
    """Return the object file name, e.g. ``abc123LG.png``."""
    return f"{file.hash}{suffix}{file.ext.lower()}"


def object_name(file: UploadFile, suffix: str = "") -> str:
    """Return the full object name within the bucket."""
    return f"{folder_for(file)}{file_name(file, suffix)}"


def public_url(base_url: str, name: str) -> str:
    """Return the public URL of an object."""
    return f"{base_url}/{name}"


def object_name_from_url(base_url: str, url: str) -> str:
    """Return the object name addressed by a public URL.

    URLs not under base_url are returned unchanged.
    """
    return url.replace(f"{base_url}/", "", 1)
