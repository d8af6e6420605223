"""Typed dataclasses describing resolved render formats."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

Metadata = dict[str, typ.Any]


class FolioError(Exception):
    """Base class for configuration failures raised by folio."""


class MetadataError(FolioError, ValueError):
    """Raised when a metadata document is not a mapping."""


class Bucket(enum.Enum):
    """Top-level destination of a metadata key inside a :class:`Format`."""

    RENDER = "render"
    EXECUTE = "execute"
    PANDOC = "pandoc"
    METADATA = "metadata"


@dc.dataclass(frozen=True, slots=True)
class BooleanShorthand:
    """``execute: true`` style value given to a structural bucket key."""

    enabled: bool


@dc.dataclass(frozen=True, slots=True)
class ObjectForm:
    """Mapping value given to a structural bucket key."""

    options: cabc.Mapping[str, typ.Any]


@dc.dataclass(frozen=True, slots=True)
class ScalarForm:
    """Any other value given to a structural bucket key."""

    value: typ.Any


BucketValue = BooleanShorthand | ObjectForm | ScalarForm


def bucket_value(value: object) -> BucketValue:
    """Tag the raw value of a structural bucket key."""
    match value:
        case bool():
            return BooleanShorthand(enabled=value)
        case cabc.Mapping():
            return ObjectForm(options=value)
        case _:
            return ScalarForm(value=value)


@dc.dataclass(slots=True)
class DependencyFile:
    """A single script, stylesheet, or resource shipped with a dependency."""

    name: str
    path: str


@dc.dataclass(slots=True)
class FormatDependency:
    """An HTML dependency bundle requested by a format."""

    name: str
    version: str
    scripts: list[DependencyFile] = dc.field(default_factory=list)
    stylesheets: list[DependencyFile] = dc.field(default_factory=list)
    resources: list[DependencyFile] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class FormatExtras:
    """Supplementary includes and filters spliced into a render."""

    variables: Metadata = dc.field(default_factory=dict)
    dependencies: list[FormatDependency] = dc.field(default_factory=list)
    include_in_header: list[str] = dc.field(default_factory=list)
    include_before_body: list[str] = dc.field(default_factory=list)
    include_after_body: list[str] = dc.field(default_factory=list)
    pre_filters: list[str] = dc.field(default_factory=list)
    post_filters: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class PandocFlags:
    """Command line flags given to a render invocation."""

    to: str | None = None
    output: str | None = None
    self_contained: bool = False
    number_sections: bool = False
    toc: bool = False


@dc.dataclass(slots=True)
class Format:
    """Bucketed configuration for rendering one output target.

    Attributes
    ----------
    render : dict
        Render-stage options (``keep-tex``, ``fig-align``, ``code-fold``...).
    execute : dict
        Execution options (``fig-width``, ``cache``, ``keep-md``...).
    pandoc : dict
        Options forwarded verbatim to the converter (``toc``, ``template``...).
    metadata : dict
        Free-form document metadata.
    format_extras : callable, optional
        Pure function of ``(flags, format)`` supplying extra includes.
    """

    render: Metadata = dc.field(default_factory=dict)
    execute: Metadata = dc.field(default_factory=dict)
    pandoc: Metadata = dc.field(default_factory=dict)
    metadata: Metadata = dc.field(default_factory=dict)
    format_extras: FormatExtrasProvider | None = None

    def bucket(self, bucket: Bucket) -> Metadata:
        """Return the mapping that stores ``bucket``."""
        return getattr(self, bucket.value)

    def to_dict(self) -> dict[str, Metadata]:
        """Return the four buckets as plain mappings keyed by bucket name."""
        return {bucket.value: dict(self.bucket(bucket)) for bucket in Bucket}


FormatExtrasProvider = cabc.Callable[[PandocFlags, Format], FormatExtras]


__all__ = [
    "BooleanShorthand",
    "Bucket",
    "BucketValue",
    "DependencyFile",
    "FolioError",
    "Format",
    "FormatDependency",
    "FormatExtras",
    "FormatExtrasProvider",
    "Metadata",
    "MetadataError",
    "ObjectForm",
    "PandocFlags",
    "ScalarForm",
    "bucket_value",
]
