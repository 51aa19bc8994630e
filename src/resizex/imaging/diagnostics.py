"""Route Pillow's ``warnings`` into a pipeline logger."""

from __future__ import annotations

import logging
import warnings
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextmanager
def forward_warnings(log: logging.Logger) -> Iterator[None]:
    """Re-emit warnings raised inside the block as ``log.warning`` records.

    Pillow reports recoverable problems (corrupt EXIF, short TIFF reads)
    through ``warnings`` rather than exceptions.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield
        finally:
            for item in caught:
                log.warning("%s: %s", item.category.__name__, item.message)
