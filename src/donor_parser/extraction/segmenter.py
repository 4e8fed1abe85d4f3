"""Entry segmenter: splits a pasted block into per-record spans."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from donor_parser.extraction.assembler import parse_one
from donor_parser.extraction.sanitizer import clean_text
from donor_parser.extraction.trace import ParseTrace
from donor_parser.schemas.donor import ParseResult
from donor_parser.schemas.trace import TraceAction

logger = logging.getLogger(__name__)


def split_entries(text: str) -> List[str]:
    """Split sanitized text into record spans on blank lines.

    A paste without internal blank lines is a single record, so the whole
    block is returned as one span.
    """
    cleaned = clean_text(text)
    if not cleaned:
        return []
    segments = [segment.strip() for segment in cleaned.split("\n\n") if segment.strip()]
    if len(segments) <= 1:
        return [cleaned]
    return segments


def _parse_segment(segment: str, traced: bool) -> ParseResult:
    return parse_one(segment, ParseTrace() if traced else None)


def parse_many(
    text: str,
    trace: Optional[ParseTrace] = None,
    workers: Optional[int] = None,
) -> List[ParseResult]:
    """Parse every record in ``text``, dropping unusable ones.

    Segments that resolve neither a name nor a blood group are logged and
    dropped. An empty list means nothing extractable was found.

    Args:
        text: Raw pasted text, possibly holding several records.
        trace: Optional tracer; receives every segment's steps in input
            order plus one ``dropped`` step per discarded segment.
        workers: Thread count for parsing segments in parallel. Results keep
            input order. Defaults to ``parse_workers`` from settings.
    """
    segments = split_entries(text)
    if not segments:
        return []

    if workers is None:
        from donor_parser.config.settings import get_settings

        workers = get_settings().parse_workers

    traced = trace is not None
    if workers > 1 and len(segments) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(segments))) as pool:
            parsed = list(pool.map(lambda s: _parse_segment(s, traced), segments))
    else:
        parsed = [_parse_segment(segment, traced) for segment in segments]

    results: List[ParseResult] = []
    for index, result in enumerate(parsed):
        if trace is not None:
            trace.extend(result.trace)
        if result.record.is_usable:
            results.append(result)
            continue
        logger.info("Dropping segment %d: no name or blood group found", index + 1)
        if trace is not None:
            trace.add(
                "segment",
                TraceAction.DROPPED,
                "neither name nor blood group resolved",
                value=result.source_text[:80],
                detail={"index": index},
            )

    logger.debug("parse_many: %d segments, %d records kept", len(segments), len(results))
    return results
