"""Reporting helpers over parsed records."""

from donor_parser.reporting.summary import CountEntry, RecordSummary, summarize_records

__all__ = ["CountEntry", "RecordSummary", "summarize_records"]
