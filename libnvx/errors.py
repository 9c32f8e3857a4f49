"""libnvx.errors

Every failure a conversion can hit is one of these. The orchestrator catches
``NvxError`` once and turns it into a failed ``ConversionResult``.
"""

from __future__ import annotations


class NvxError(RuntimeError):
    pass


class InputNotFoundError(NvxError):
    """Input path does not resolve to a readable file."""


class NvxFormatError(NvxError):
    """Magic tag does not match any known format."""


class NvxDecodeError(NvxError):
    """Short read or inconsistent counts in the middle of a decode."""


class UnsupportedFormatError(NvxError):
    """The sniffer recognised the tag but no decoder is registered for it."""


class ObjWriteError(NvxError):
    """Output path could not be written."""
