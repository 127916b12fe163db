"""Image asset value objects.

An image asset is a blob stored under its owner's namespace (the owning
Profile.id) plus the public URL derived from it. Listings reference assets
by URL and, for rows written by this client, by storage path as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from nexar.domain.shared.exceptions import ValidationError


@dataclass(frozen=True)
class ImageUpload:
    """A file the caller wants attached to a listing or profile."""

    filename: str
    content: bytes
    content_type: str | None = None

    def __post_init__(self) -> None:
        if not self.filename:
            msg = "Image filename cannot be empty"
            raise ValidationError(msg)

    @property
    def extension(self) -> str | None:
        if "." not in self.filename:
            return None
        ext = self.filename.rsplit(".", 1)[-1].strip().lower()
        return ext or None

    def storage_path(self, namespace: UUID | str) -> str:
        """Derive a globally-unique storage key under ``namespace``."""
        name = str(uuid4())
        if self.extension:
            name = f"{name}.{self.extension}"
        return f"{namespace}/{name}"

    def __repr__(self) -> str:
        return f"ImageUpload(filename={self.filename!r}, size={len(self.content)})"


@dataclass(frozen=True)
class ImageAsset:
    """A stored image: its canonical storage path and public URL."""

    path: str
    url: str

    @property
    def namespace(self) -> str:
        return self.path.split("/", 1)[0]


def storage_path_from_public_url(url: str) -> str:
    """Recover ``{namespace}/{file}`` from a public URL's last two segments.

    Only needed for rows without persisted storage paths. Breaks if the
    public URL scheme ever nests objects deeper than one namespace level.
    """
    parts = url.split("/")
    if len(parts) < 2:
        msg = f"Cannot derive storage path from URL: {url}"
        raise ValidationError(msg)
    return f"{parts[-2]}/{parts[-1]}"
