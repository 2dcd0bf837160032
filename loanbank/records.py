"""Loan record files: one loan per line, keyed by the borrower's NID."""

from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator, Optional

#: A record whose due amount is at or below this counts as fully repaid.
COMPLETED_THRESHOLD = 0.001

_NUMBER = r"([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
_FIELDS = ("LOAN", "REPAYMENT", "EMI", "INTEREST", "PAID", "DUE")
_PATTERN = re.compile(
    r"\s*NID\s*-->\s*([-+]?\d+)\s*"
    + "".join(rf"\|\|\s*{name}\s*-->\s*{_NUMBER}\s*BDT\s*" for name in _FIELDS)
)


@dataclass
class LoanRecord:
    """A single loan: amounts in BDT, with what has been paid and what is due."""

    nid: int
    loan: float
    repayment: float
    emi: float
    interest: float
    paid: float = 0.0
    due: Optional[float] = None

    def __post_init__(self) -> None:
        if self.due is None:
            self.due = self.repayment - self.paid

    def format(self) -> str:
        """Render the record as one line of a record file, without newline."""
        return (
            f"NID --> {self.nid} ||  LOAN --> {self.loan:.3f} BDT ||    "
            f"REPAYMENT --> {self.repayment:.3f} BDT ||   EMI --> {self.emi:.3f} BDT ||    "
            f"INTEREST --> {self.interest:.3f} BDT || PAID --> {self.paid:.3f} BDT|| "
            f"DUE --> {self.due:.3f} BDT"
        )

    @classmethod
    def parse(cls, line: str) -> "LoanRecord":
        """Read a record line; raise ValueError if it is not one."""
        match = _PATTERN.match(line)
        if match is None:
            raise ValueError(f"not a loan record: {line!r}")
        nid, *amounts = match.groups()
        loan, repayment, emi, interest, paid, due = (float(a) for a in amounts)
        return cls(int(nid), loan, repayment, emi, interest, paid, due)


class RecordBook:
    """A text file of loan records."""

    def __init__(self, path) -> None:
        self.path = Path(path)

    def _read_lines(self) -> list[str]:
        return self.path.read_text(encoding="utf-8").splitlines(keepends=True)

    def _write_lines(self, lines: list[str]) -> None:
        directory = self.path.parent if str(self.path.parent) else Path(".")
        fd, temp_name = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.writelines(lines)
            os.replace(temp_name, self.path)
        except BaseException:
            if os.path.exists(temp_name):
                os.remove(temp_name)
            raise

    def records(self) -> Iterator[LoanRecord]:
        """Yield every well-formed record; a missing file holds none."""
        try:
            lines = self._read_lines()
        except FileNotFoundError:
            return
        for line in lines:
            try:
                yield LoanRecord.parse(line)
            except ValueError:
                continue

    def find(self, nid: int) -> Optional[LoanRecord]:
        """Return the first record for ``nid``, or None."""
        return next((r for r in self.records() if r.nid == nid), None)

    def exists(self, nid: int) -> bool:
        """Whether any record belongs to ``nid``."""
        return self.find(nid) is not None

    def append(self, record: LoanRecord) -> None:
        """Add a record at the end of the file."""
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(record.format() + "\n")

    def update_payment(self, nid: int, due: float, paid: float) -> int:
        """Set due and paid on every record of ``nid``; return how many changed."""
        updated = 0
        lines = []
        for line in self._read_lines():
            try:
                record = LoanRecord.parse(line)
            except ValueError:
                lines.append(line)
                continue
            if record.nid == nid:
                lines.append(replace(record, paid=paid, due=due).format() + "\n")
                updated += 1
            else:
                lines.append(line)
        self._write_lines(lines)
        return updated

    def delete_completed(self, nid: int) -> int:
        """Remove the fully repaid records of ``nid``; return how many went."""
        deleted = 0
        lines = []
        for line in self._read_lines():
            try:
                record = LoanRecord.parse(line)
            except ValueError:
                lines.append(line)
                continue
            if record.nid == nid and record.due <= COMPLETED_THRESHOLD:
                deleted += 1
                continue
            lines.append(line)
        self._write_lines(lines)
        return deleted

    def pay(self, nid: int, amount: float) -> LoanRecord:
        """Pay ``amount`` towards the loan of ``nid`` and return the new record.

        If nothing is due any more, the record is removed and returned unchanged.
        """
        if amount < 0:
            raise ValueError("payment amount must not be negative")
        record = self.find(nid)
        if record is None:
            raise LookupError(f"no loan on record for NID {nid}")
        if record.due <= 0:
            self.delete_completed(nid)
            return record
        updated = replace(record, paid=record.paid + amount, due=record.due - amount)
        self.update_payment(nid, updated.due, updated.paid)
        return updated