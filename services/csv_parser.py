from __future__ import annotations

import csv
from dataclasses import dataclass, field
from io import StringIO
from typing import Dict, List

from models.load_result import RowIssue

RawRow = Dict[str, str]


class CsvFatalError(Exception):
    """The header row could not be tokenized, so no row can be keyed."""


@dataclass
class CsvParseResult:
    rows: List[RawRow]
    headers: List[str]
    issues: List[RowIssue] = field(default_factory=list)


def _strip(s: str) -> str:
    return s.strip("\ufeff ")  # also strip any BOM left in-line


def _issue_code(error: csv.Error) -> str:
    return "InvalidQuotes" if '"' in str(error) or "quote" in str(error).lower() else "MalformedRow"


def parse_csv(text: str, header: bool = True) -> CsvParseResult:
    """Parse CSV text into row mappings.

    - Skips fully blank lines.
    - With header=True keys are the header cells; otherwise the column index.
    - Short rows keep only the columns they have and long rows drop the
      surplus cells; both are reported as row issues, not errors.
    - A row the reader cannot tokenize (e.g. stray quotes) is dropped and
      reported; only an unreadable header row is fatal.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    reader = csv.reader(StringIO(normalized), strict=True)

    rows: List[RawRow] = []
    issues: List[RowIssue] = []
    headers: List[str] = []
    while True:
        try:
            raw = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            # The reader discards the offending line and resumes on the next one
            if header and not headers:
                raise CsvFatalError(f"line {reader.line_num}: {e}") from e
            issues.append(RowIssue(reader.line_num, _issue_code(e), str(e)))
            continue
        if not raw or all(_strip(c) == "" for c in raw):
            continue
        if header and not headers:
            headers = [_strip(h) for h in raw]
            continue
        if not header:
            rows.append({str(i): v for i, v in enumerate(raw)})
            continue
        # line_num counts physical lines, which is what a user sees in an editor
        line = reader.line_num
        if len(raw) < len(headers):
            issues.append(RowIssue(line, "TooFewFields", f"Expected {len(headers)} fields but parsed {len(raw)}"))
        elif len(raw) > len(headers):
            issues.append(RowIssue(line, "TooManyFields", f"Expected {len(headers)} fields but parsed {len(raw)}"))
        rows.append({h: v for h, v in zip(headers, raw) if h})

    return CsvParseResult(rows=rows, headers=headers, issues=issues)
