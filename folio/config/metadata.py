"""Classify document metadata into render formats and load included metadata.

Document front matter is a flat bag of keys. :func:`metadata_as_format` sorts
every key into exactly one of the four :class:`~folio.config.models.Format`
buckets, :func:`format_from_metadata` layers a per-output override block from
``metadata.format.<to>`` over a base format, and :func:`included_metadata`
reads the external YAML files a document points at through
``metadata-file`` / ``metadata-files``.

Examples
--------
>>> from folio.config.metadata import metadata_as_format
>>> fmt = metadata_as_format({"title": "Notes", "toc": True, "execute": False})
>>> fmt.metadata, fmt.pandoc, fmt.execute
({'title': 'Notes'}, {'toc': True}, {'enabled': False})
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from folio import _constants as const

from .keys import STRUCTURAL_KEYS, bucket_for_key
from .loader import read_yaml
from .merge import merge_configs, merge_formats
from .models import (
    BooleanShorthand,
    Bucket,
    Format,
    Metadata,
    ObjectForm,
    ScalarForm,
    bucket_value,
)

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class IncludedMetadata:
    """Merged metadata from external files and every path that was tried."""

    metadata: Metadata
    files: list[Path]


def empty_classified_format() -> Format:
    """Return a format with four empty buckets and no extras."""
    return Format()


def metadata_as_format(metadata: cabc.Mapping[str, typ.Any]) -> Format:
    """Sort every key of ``metadata`` into one of the four format buckets.

    Parameters
    ----------
    metadata : Mapping[str, Any]
        Flat document metadata, typically parsed front matter.

    Returns
    -------
    Format
        A new format. Keys that name a bucket (``render``, ``execute``,
        ``pandoc``, ``metadata``) and hold a mapping are merged into that
        bucket; ``execute: <bool>`` sets ``execute.enabled``; other keys are
        routed by :func:`~folio.config.keys.bucket_for_key`.

    Notes
    -----
    A bare boolean (or any other non-mapping value) given to the ``render``,
    ``pandoc``, or ``metadata`` keys is not a bucket declaration; it is kept as
    ordinary document metadata under its own key.
    """
    fmt = empty_classified_format()
    for key, value in metadata.items():
        bucket = STRUCTURAL_KEYS.get(key)
        if bucket is None:
            fmt.bucket(bucket_for_key(key))[key] = copy.deepcopy(value)
            continue
        match bucket_value(value):
            case BooleanShorthand(enabled=enabled) if bucket is Bucket.EXECUTE:
                fmt.execute[const.EXECUTE_ENABLED] = enabled
            case ObjectForm(options=options):
                fmt.bucket(bucket).update(copy.deepcopy(dict(options)))
            case BooleanShorthand() | ScalarForm():
                fmt.metadata[key] = copy.deepcopy(value)
    return fmt


def format_from_metadata(base_format: Format, to: str, *, debug: bool = False) -> Format:
    """Resolve the format used to render ``base_format`` as output ``to``.

    The entry ``base_format.metadata["format"][to]`` is an optional override
    block: the string ``"default"`` selects an empty override, a mapping is
    classified with :func:`metadata_as_format`, and anything else is ignored.
    The override is merged over the base format. In debug mode the
    intermediate TeX (render bucket) and markdown (execute bucket) are kept.
    """
    override = empty_classified_format()
    config_formats = base_format.metadata.get(const.METADATA_FORMAT)
    if isinstance(config_formats, cabc.Mapping):
        match config_formats.get(to):
            case str() as marker if marker == const.DEFAULTS_MARKER:
                override = metadata_as_format({})
            case cabc.Mapping() as config_format:
                override = metadata_as_format(config_format)
            case _:
                pass

    merged = merge_formats(base_format, override)

    if debug:
        merged.render[const.KEEP_TEX] = True
        merged.execute[const.KEEP_MD] = True

    return merged


def set_format_metadata(
    fmt: Format, namespace: str, key: str, value: object
) -> None:
    """Set ``fmt.metadata[namespace][key]``, creating the namespace mapping."""
    if not isinstance(fmt.metadata.get(namespace), dict):
        fmt.metadata[namespace] = {}
    fmt.metadata[namespace][key] = value


def included_metadata(
    directory: Path, base_metadata: cabc.Mapping[str, typ.Any]
) -> IncludedMetadata:
    """Read and merge the metadata files referenced by ``base_metadata``.

    Parameters
    ----------
    directory : Path
        Directory that relative metadata file paths are resolved against.
    base_metadata : Mapping[str, Any]
        Metadata that may declare ``metadata-file`` (one path) and
        ``metadata-files`` (a list of paths).

    Returns
    -------
    IncludedMetadata
        The files merged in declaration order (later files win) and every
        path that was considered, whether or not it exists.

    Raises
    ------
    MetadataError
        If an existing file does not contain a YAML mapping.
    ruamel.yaml.YAMLError
        If an existing file cannot be parsed.
    """
    yaml_files: list[Path] = []
    metadata_file = base_metadata.get(const.METADATA_FILE)
    if metadata_file:
        yaml_files.append(directory / str(metadata_file))

    metadata_files = base_metadata.get(const.METADATA_FILES)
    if isinstance(metadata_files, list):
        yaml_files.extend(directory / str(item) for item in metadata_files)

    documents: list[Metadata] = []
    for yaml_file in yaml_files:
        if not yaml_file.exists():
            logger.debug("Metadata file %s does not exist; skipping.", yaml_file)
            continue
        try:
            documents.append(read_yaml(yaml_file))
        except Exception:
            logger.error("Error reading metadata file from %s", yaml_file)
            raise

    return IncludedMetadata(metadata=merge_configs({}, *documents), files=yaml_files)


__all__ = [
    "IncludedMetadata",
    "empty_classified_format",
    "format_from_metadata",
    "included_metadata",
    "metadata_as_format",
    "set_format_metadata",
]
