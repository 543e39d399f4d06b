"""Upload record models.

The host passes an UploadFile to upload() and delete(); the provider writes
the resulting public URLs back onto the same object.
"""

from __future__ import annotations

import mimetypes
import re
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .types import FileExtension, FileHash

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class RelatedRef(BaseModel):
    """Entity the file is attached to."""

    model_config = ConfigDict(extra="allow")

    ref: str | None = None


class UploadFile(BaseModel):
    """
    File being uploaded or deleted.

    Accepts the host's camelCase URL keys (``urlLG``, ``urlThumb``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""
    hash: FileHash
    ext: FileExtension = ""
    mime: str = "application/octet-stream"
    buffer: bytes = Field(default=b"", repr=False)
    path: str | None = None
    related: list[RelatedRef] = Field(default_factory=list)

    # Results, set by the provider
    url: str | None = None
    url_lg: str | None = Field(default=None, alias="urlLG")
    url_md: str | None = Field(default=None, alias="urlMD")
    url_sm: str | None = Field(default=None, alias="urlSM")
    url_thumb: str | None = Field(default=None, alias="urlThumb")

    @property
    def size(self) -> int:
        """Buffer size in bytes."""
        return len(self.buffer)

    @property
    def urls(self) -> dict[str, str]:
        """Public URLs set so far, keyed by the host's field names."""
        return {
            key: value
            for key, value in self.model_dump(
                by_alias=True,
                include={"url", "url_lg", "url_md", "url_sm", "url_thumb"},
            ).items()
            if value
        }

    @classmethod
    def from_local_file(cls, local_path: str | Path, folder: str | None = None) -> UploadFile:
        """Build an upload record from a file on disk.

        The hash is the sanitized file stem followed by a random suffix.

        Raises:
            FileNotFoundError: If the local file doesn't exist
        """
        path = Path(local_path)
        if not path.is_file():
            raise FileNotFoundError(f"Local file not found: {local_path}")

        stem = _UNSAFE_CHARS.sub("_", path.stem).strip("_") or "file"
        mime, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            hash=f"{stem}_{uuid4().hex[:10]}",
            ext=path.suffix,
            mime=mime or "application/octet-stream",
            buffer=path.read_bytes(),
            path=folder,
        )
