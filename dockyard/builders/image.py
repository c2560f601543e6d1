"""Image pull parameters and builder.

``POST /images/create`` takes no body; every field is a query parameter.
"""

import base64
import json
from typing import Any, ClassVar, Optional

from pydantic import Field

from dockyard.builders.base import ConfigBuilder, WireModel

DEFAULT_TAG = "latest"

REGISTRY_AUTH_HEADER = "X-Registry-Auth"


class RegistryAuth(WireModel):
    """Registry credentials sent with a pull in the ``X-Registry-Auth`` header.

    Either ``username``/``password`` or an ``identitytoken`` from a prior
    ``docker login`` is expected.
    """

    username: Optional[str] = Field(default=None, alias="username")
    password: Optional[str] = Field(default=None, alias="password")
    email: Optional[str] = Field(default=None, alias="email")
    server_address: Optional[str] = Field(default=None, alias="serveraddress")
    identity_token: Optional[str] = Field(default=None, alias="identitytoken")

    def encode(self) -> str:
        """Base64url-encoded JSON, as the daemon expects in the header."""
        raw = json.dumps(self.to_body()).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii")

    def as_headers(self) -> dict[str, str]:
        return {REGISTRY_AUTH_HEADER: self.encode()}

    def __repr__(self) -> str:
        return f"RegistryAuth(username={self.username!r}, server_address={self.server_address!r})"


def split_reference(image: str) -> tuple[str, Optional[str]]:
    """Split ``name[:tag]`` or ``name@digest`` into the name and tag or digest.

    A colon followed by a path (``registry.local:5000/app``) is a registry
    port, not a tag.
    """
    name, sep, digest = image.partition("@")
    if sep and name and digest:
        return name, digest

    name, sep, tag = image.rpartition(":")
    if sep and name and tag and "/" not in tag:
        return name, tag
    return image, None


class ImagePullConfig(WireModel):
    """Validated parameters for pulling (or importing) an image."""

    QUERY_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"from_image", "from_src", "repo", "tag", "message", "platform"}
    )

    from_image: str = Field(alias="fromImage", min_length=1)
    tag: str = Field(default=DEFAULT_TAG, alias="tag", min_length=1)
    from_src: Optional[str] = Field(default=None, alias="fromSrc")
    repo: Optional[str] = Field(default=None, alias="repo")
    message: Optional[str] = Field(default=None, alias="message")
    platform: Optional[str] = Field(default=None, alias="platform")

    @property
    def reference(self) -> str:
        """Full ``image:tag`` (or ``image@digest``) reference."""
        separator = "@" if ":" in self.tag else ":"
        return f"{self.from_image}{separator}{self.tag}"

    @classmethod
    def with_image(cls, image: str) -> "ImagePullConfigBuilder":
        """Start a builder for ``image``. A ``name:tag`` reference is split."""
        return ImagePullConfigBuilder().image(image)

    @classmethod
    def builder(cls) -> "ImagePullConfigBuilder":
        return ImagePullConfigBuilder()


class ImagePullConfigBuilder(ConfigBuilder[ImagePullConfig]):
    """Fluent builder for :class:`ImagePullConfig`.

    The tag falls back to ``latest`` when never set. A tag or digest embedded
    in the image reference is replaced by the next ``image()`` call; one set
    with ``tag()`` is kept.
    """

    config_class = ImagePullConfig
    required_fields = ("from_image",)

    def __init__(self) -> None:
        super().__init__()
        self._tag_from_image = False

    def image(self, image: str) -> "ImagePullConfigBuilder":
        """Set the image.

        An embedded tag (``alpine:3.19``) or digest (``alpine@sha256:...``)
        also sets ``tag``; the daemon accepts a digest in its place.
        """
        name, tag = split_reference(image)
        if tag is not None:
            self._set("tag", tag)
            self._tag_from_image = True
        elif self._tag_from_image:
            self._values.pop("tag", None)
            self._tag_from_image = False
        return self._set("from_image", name)

    def tag(self, tag: str) -> "ImagePullConfigBuilder":
        """Set the tag or digest explicitly."""
        self._tag_from_image = False
        return self._set("tag", tag)

    def source(self, source: str) -> "ImagePullConfigBuilder":
        """Import from a URL instead of a registry."""
        return self._set("from_src", source)

    def repo(self, repo: str) -> "ImagePullConfigBuilder":
        return self._set("repo", repo)

    def message(self, message: str) -> "ImagePullConfigBuilder":
        return self._set("message", message)

    def platform(self, platform: str) -> "ImagePullConfigBuilder":
        return self._set("platform", platform)

    def _prepare(self) -> dict[str, Any]:
        values = super()._prepare()
        if not values.get("tag"):
            values["tag"] = DEFAULT_TAG
        return values
