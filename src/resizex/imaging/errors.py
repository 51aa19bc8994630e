"""Exception hierarchy for the imaging pipeline."""

from __future__ import annotations


class ResizeXError(Exception):
    """Base class for all pipeline errors."""


class DecodeError(ResizeXError):
    """The input bytes are not a recognized, intact image."""


class MetadataReadError(ResizeXError):
    """The orientation metadata could not be read.

    Never fatal: the pipeline treats it as an upright image.
    """
