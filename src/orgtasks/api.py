"""The major exported API functions for parsing Org task files."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/orgtasks/api.py
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from orgtasks.exceptions import FileError, ParsingError
from orgtasks.model.results import BatchResult, ParseError, ParseMetadata, ParseResult, ParseSeverity
from orgtasks.options.parser import OrgTaskParserOptions
from orgtasks.parsers.org import OrgTaskParser
from orgtasks.progress import ProgressCallback, emit_progress
from orgtasks.utils.encoding import read_org_file

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
FileInput = Union[PathLike, tuple[PathLike, str]]


def parse_org_content(
    content: str,
    source_path: str = "",
    options: Optional[OrgTaskParserOptions] = None,
    *,
    now: Optional[datetime] = None,
) -> ParseResult:
    """Parse Org-formatted task content.

    Parameters
    ----------
    content : str
        Decoded Org text
    source_path : str, default ""
        Path the content came from. Directory segments named ``work`` or
        ``home`` select the default context; the path also feeds entity
        identifiers.
    options : OrgTaskParserOptions, optional
        Parser configuration. Defaults are used when omitted.
    now : datetime, optional
        Instant stamped onto created entities (current UTC time by default)

    Returns
    -------
    ParseResult
        Tasks, projects and diagnostics. Malformed content is reported as
        diagnostics; this function does not raise for it.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an ``OrgTaskParserOptions`` instance

    Examples
    --------
        >>> result = parse_org_content("* TODO [#A] Call Bob :phone:", "work/inbox.org")
        >>> task = result.tasks[0]
        >>> task.status, task.priority, task.tags, task.context
        ('not-started', 'A', ['phone'], 'work')

    """
    return OrgTaskParser(options).parse(content, source_path, now=now)


def parse_org_file(
    path: PathLike,
    options: Optional[OrgTaskParserOptions] = None,
    *,
    now: Optional[datetime] = None,
    raise_on_fatal: bool = False,
) -> ParseResult:
    """Read and parse an Org file.

    Parameters
    ----------
    path : str or Path
        File to parse; its string form is used as ``source_path``
    options : OrgTaskParserOptions, optional
        Parser configuration
    now : datetime, optional
        Instant stamped onto created entities
    raise_on_fatal : bool, default False
        Raise ``ParsingError`` instead of returning a result when the parser
        fails internally

    Returns
    -------
    ParseResult
        Result for the file

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be read
    ParsingError
        If ``raise_on_fatal`` is set and parsing failed internally

    """
    source_path = str(path)
    content = read_org_file(path)
    result = parse_org_content(content, source_path, options, now=now)
    if raise_on_fatal and result.fatal:
        raise ParsingError(result.errors[0].message, source_path=source_path)
    return result


def _unreadable_result(parser: OrgTaskParser, source_path: str, error: FileError, now: datetime) -> ParseResult:
    diagnostic = ParseError.create(ParseSeverity.ERROR, error.message, context=source_path)
    metadata = ParseMetadata(source_path, 0, parser.resolve_default_context(source_path), now)
    return ParseResult(errors=[diagnostic], metadata=metadata)


def _split_input(item: FileInput) -> tuple[str, Optional[str]]:
    if isinstance(item, tuple):
        path, content = item
        return str(path), content
    return str(item), None


def parse_org_files(
    files: Iterable[FileInput],
    options: Optional[OrgTaskParserOptions] = None,
    max_workers: Optional[int] = None,
    progress_callback: Optional[ProgressCallback] = None,
    *,
    now: Optional[datetime] = None,
) -> BatchResult:
    """Parse several Org files, optionally in parallel.

    Each file is parsed independently. A file that cannot be read
    contributes a result holding a single ``ERROR`` diagnostic and the rest
    of the batch continues.

    Parameters
    ----------
    files : iterable of path or (path, content)
        Files to read, or pairs of a path and already-decoded content
    options : OrgTaskParserOptions, optional
        Parser configuration shared by every file
    max_workers : int, optional
        Thread pool size; ``1`` parses sequentially in the calling thread
    progress_callback : ProgressCallback, optional
        Receives ``started``, ``item_done``, ``error`` and ``finished`` events
    now : datetime, optional
        Instant stamped onto every created entity

    Returns
    -------
    BatchResult
        One ``ParseResult`` per input, in input order

    Examples
    --------
        >>> batch = parse_org_files(["work/inbox.org", ("home/chores.org", "* TODO Laundry")])
        >>> [result.metadata.context for result in batch.results]
        ['work', 'home']

    """
    parser = OrgTaskParser(options)
    parsed_at = now or datetime.now(timezone.utc)
    inputs: Sequence[tuple[str, Optional[str]]] = [_split_input(item) for item in files]
    total = len(inputs)
    start = time.perf_counter()

    def parse_one(source_path: str, content: Optional[str]) -> ParseResult:
        if content is None:
            try:
                content = read_org_file(source_path)
            except FileError as e:
                logger.warning("Skipping %s: %s", source_path, e.message)
                return _unreadable_result(parser, source_path, e, parsed_at)
        return parser.parse(content, source_path, now=parsed_at)

    emit_progress(progress_callback, "started", f"Parsing {total} file(s)", 0, total)

    if max_workers == 1 or total <= 1:
        results_iter = (parse_one(path, content) for path, content in inputs)
        results = _collect(results_iter, inputs, progress_callback)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(parse_one, path, content) for path, content in inputs]
            results = _collect((future.result() for future in futures), inputs, progress_callback)

    emit_progress(progress_callback, "finished", f"Parsed {total} file(s)", total, total)
    logger.debug("Parsed %d files in %.3fs", total, time.perf_counter() - start)
    return BatchResult(results=results)


def _collect(
    results_iter: Iterable[ParseResult],
    inputs: Sequence[tuple[str, Optional[str]]],
    progress_callback: Optional[ProgressCallback],
) -> list[ParseResult]:
    results = []
    total = len(inputs)
    for index, result in enumerate(results_iter, start=1):
        source_path = inputs[index - 1][0]
        results.append(result)
        if result.has_errors:
            emit_progress(
                progress_callback,
                "error",
                f"Errors in {source_path}",
                index,
                total,
                source_path=source_path,
                error=str(next(e for e in result.errors if e.is_error)),
            )
        emit_progress(progress_callback, "item_done", f"Parsed {source_path}", index, total, source_path=source_path)
    return results
