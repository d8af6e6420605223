"""Common literal values used across folio.

These constants keep metadata and project keys centralized so the classifier,
the book resolver, and tests can import the same values without drifting.
Intended for internal use within the folio package.

Examples
--------
>>> from folio import _constants
>>> _constants.DEFAULTS_MARKER
'default'
>>> _constants.PROJECT_FILENAMES[0]
'_folio.yml'
"""

# Structural bucket names allowed at the top level of metadata.
RENDER_DEFAULTS = "render"
EXECUTE_DEFAULTS = "execute"
PANDOC_DEFAULTS = "pandoc"
PANDOC_METADATA = "metadata"

# Flag set inside the execute bucket by the ``execute: <bool>`` shorthand.
EXECUTE_ENABLED = "enabled"

KEEP_MD = "keep-md"
KEEP_TEX = "keep-tex"

METADATA_FORMAT = "format"
METADATA_FILE = "metadata-file"
METADATA_FILES = "metadata-files"
DEFAULTS_MARKER = "default"

PROJECT_FILENAMES = ("_folio.yml", "_folio.yaml")
