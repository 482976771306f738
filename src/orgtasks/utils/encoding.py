#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/utils/encoding.py
"""Reading Org files from disk.

Org files are usually UTF-8, but notes synced from older editors are often
cp1252 or latin-1. Bytes are decoded with chardet when it is installed and
with a fixed list of fallback encodings otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from orgtasks.exceptions import FileAccessError, FileNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of ``data`` using chardet.

    Parameters
    ----------
    data : bytes
        Raw file content
    sample_size : int, default 8192
        Number of leading bytes to analyze
    confidence_threshold : float, default 0.7
        Minimum confidence required to trust the detection

    Returns
    -------
    str or None
        Encoding name, or None when chardet is not installed, detection
        fails, or confidence is too low

    """
    try:
        import chardet
    except ImportError:
        logger.debug("chardet not available for encoding detection")
        return None

    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
    if confidence < confidence_threshold:
        return None
    return encoding


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: tuple[str, ...] = DEFAULT_FALLBACK_ENCODINGS,
) -> str:
    """Decode ``data`` to text.

    Pure ASCII and valid UTF-8 short-circuit detection. Otherwise the
    chardet guess is tried first, then each fallback encoding in order,
    and finally UTF-8 with replacement characters.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass

    candidates = list(fallback_encodings)
    detected = detect_encoding(data)
    if detected:
        candidates.insert(0, detected)

    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Failed to decode with %s: %s", encoding, e)
            continue
        logger.debug("Decoded with encoding: %s", encoding)
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def read_org_file(path: Union[str, Path]) -> str:
    """Read and decode an Org file.

    Parameters
    ----------
    path : str or Path
        File to read

    Returns
    -------
    str
        Decoded content with a leading byte-order mark removed

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist
    FileAccessError
        If ``path`` is a directory or cannot be read

    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(str(path))
    if file_path.is_dir():
        raise FileAccessError(str(path), f"Expected a file but got a directory: {path}")

    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(path), f"Cannot read {path}: {e}", original_error=e) from e

    return read_text_with_encoding_detection(data).lstrip("\ufeff")
