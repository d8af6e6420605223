"""Merge document metadata into typed render formats.

This subpackage classifies flat front matter into the four buckets of a
:class:`Format` (render, execute, pandoc, metadata), layers per-output
overrides declared under ``format:`` over a base format, and reads the
external metadata files a document references. The entry points are
:func:`metadata_as_format`, :func:`format_from_metadata`, and
:func:`included_metadata`; :func:`merge_configs` is the deep merge they share.

Examples
--------
>>> from folio.config import format_from_metadata, metadata_as_format
>>> base = metadata_as_format({"toc": False, "format": {"html": {"toc": True}}})
>>> format_from_metadata(base, "html").pandoc["toc"]
True
"""

from .keys import KEY_BUCKETS, STRUCTURAL_KEYS, bucket_for_key
from .loader import (
    parse_yaml,
    read_yaml,
    read_yaml_from_markdown,
    read_yaml_from_markdown_file,
)
from .merge import merge_configs, merge_formats
from .metadata import (
    IncludedMetadata,
    empty_classified_format,
    format_from_metadata,
    included_metadata,
    metadata_as_format,
    set_format_metadata,
)
from .models import (
    BooleanShorthand,
    Bucket,
    DependencyFile,
    FolioError,
    Format,
    FormatDependency,
    FormatExtras,
    Metadata,
    MetadataError,
    ObjectForm,
    PandocFlags,
    ScalarForm,
)
from .outputs import is_html_output, is_latex_output, is_markdown_output

__all__ = [
    "KEY_BUCKETS",
    "STRUCTURAL_KEYS",
    "BooleanShorthand",
    "Bucket",
    "DependencyFile",
    "FolioError",
    "Format",
    "FormatDependency",
    "FormatExtras",
    "IncludedMetadata",
    "Metadata",
    "MetadataError",
    "ObjectForm",
    "PandocFlags",
    "ScalarForm",
    "bucket_for_key",
    "empty_classified_format",
    "format_from_metadata",
    "included_metadata",
    "is_html_output",
    "is_latex_output",
    "is_markdown_output",
    "merge_configs",
    "merge_formats",
    "metadata_as_format",
    "parse_yaml",
    "read_yaml",
    "read_yaml_from_markdown",
    "read_yaml_from_markdown_file",
    "set_format_metadata",
]
