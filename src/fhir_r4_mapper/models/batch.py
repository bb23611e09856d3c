"""Batch loading data models.

This module defines the per-row outcome produced while streaming a CSV source
and the aggregate result of loading a whole source.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fhir_r4_mapper.models.patient import Patient
from fhir_r4_mapper.utils.exceptions import MalformedRowError


# Maximum issues listed in a formatted report
REPORT_LIMIT = 20


@dataclass(frozen=True)
class RowOutcome:
    """Result of mapping a single CSV row.

    Exactly one of ``patient`` and ``error`` is set.

    Attributes:
        line_number: 1-based line number in the source (header is line 1)
        patient: Mapped Patient when the row was well-formed
        error: Rejection details when the row was malformed
    """

    line_number: int
    patient: Optional[Patient] = None
    error: Optional[MalformedRowError] = None

    @property
    def ok(self) -> bool:
        """Check if the row was mapped successfully."""
        return self.error is None


@dataclass
class LoadResult:
    """Patients and rejected rows from loading one CSV source.

    Attributes:
        patients: Mapped patients in source line order
        malformed_rows: Rejected rows in source line order
        read_error: Description of an I/O failure that cut the load short
        total_rows: Number of data rows read (header excluded)

    Example:
        >>> result = load_patients(Path("patients.csv"))
        >>> if result.has_errors:
        ...     print(result.format_report())
    """

    patients: List[Patient] = field(default_factory=list)
    malformed_rows: List[MalformedRowError] = field(default_factory=list)
    read_error: Optional[str] = None
    total_rows: int = 0

    @property
    def truncated(self) -> bool:
        """Check if reading stopped early because of an I/O error."""
        return self.read_error is not None

    @property
    def has_errors(self) -> bool:
        """Check if any row was rejected or the source was truncated."""
        return bool(self.malformed_rows) or self.truncated

    def add(self, outcome: RowOutcome) -> None:
        """Record one row outcome."""
        self.total_rows += 1
        if outcome.ok:
            self.patients.append(outcome.patient)
        else:
            self.malformed_rows.append(outcome.error)

    def format_report(self) -> str:
        """Format load results as human-readable report.

        Returns:
            Multi-line string with load summary and rejected rows
        """
        lines = []
        lines.append("=" * 60)
        lines.append("CSV CONVERSION REPORT")
        lines.append("=" * 60)
        lines.append("")

        lines.append("SUMMARY:")
        lines.append(f"  Total rows: {self.total_rows}")
        lines.append(f"  Patients mapped: {len(self.patients)}")
        lines.append(f"  Malformed rows: {len(self.malformed_rows)}")
        lines.append("")

        if self.read_error:
            lines.append("READ ERROR:")
            lines.append(f"  {self.read_error}")
            lines.append("  Results contain only the rows read before the error.")
            lines.append("")

        if self.malformed_rows:
            lines.append(f"MALFORMED ROWS ({len(self.malformed_rows)}):")
            for error in self.malformed_rows[:REPORT_LIMIT]:
                lines.append(f"  Line {error.line_number}: {error.reason}")
            if len(self.malformed_rows) > REPORT_LIMIT:
                lines.append(
                    f"  ... and {len(self.malformed_rows) - REPORT_LIMIT} more rows"
                )
            lines.append("")

        lines.append("=" * 60)
        if self.has_errors:
            lines.append("RESULT: COMPLETED WITH ERRORS")
        else:
            lines.append("RESULT: SUCCESS")
        lines.append("=" * 60)

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary for JSON serialization.

        Patients are not included; encode them with the codec.
        """
        return {
            "total_rows": self.total_rows,
            "patients_mapped": len(self.patients),
            "read_error": self.read_error,
            "malformed_rows": [
                {
                    "line_number": error.line_number,
                    "reason": error.reason,
                    "fields": list(error.fields),
                }
                for error in self.malformed_rows
            ],
        }
