"""Export of rejected CSV rows for correction and re-import."""

from pathlib import Path

import pandas as pd

from fhir_r4_mapper.csv_parser.columns import COLUMN_COUNT, column_names
from fhir_r4_mapper.logging_audit import get_logger
from fhir_r4_mapper.models.batch import LoadResult


logger = get_logger(__name__)


def export_malformed_rows(result: LoadResult, output_path: Path) -> int:
    """Export rows rejected during loading to a separate CSV file.

    Each output row holds the source line number, the raw fields under their
    positional column names, and an error_description column. Short rows are
    padded with empty values; fields past the 25th column are dropped.

    Args:
        result: LoadResult containing malformed rows
        output_path: Path where the error CSV should be written

    Returns:
        Number of rows exported

    Raises:
        ValueError: If the result has no malformed rows
        FileNotFoundError: If output_path parent directory doesn't exist
    """
    logger.info(f"Exporting malformed rows to {output_path}")

    if not result.malformed_rows:
        raise ValueError("No malformed rows to export")

    if not output_path.parent.exists():
        raise FileNotFoundError(
            f"Output directory does not exist: {output_path.parent}"
        )

    names = column_names()
    records = []
    for error in result.malformed_rows:
        fields = list(error.fields[:COLUMN_COUNT])
        fields += [""] * (COLUMN_COUNT - len(fields))
        record = {"line_number": error.line_number}
        record.update(zip(names, fields))
        record["error_description"] = error.reason
        records.append(record)

    error_df = pd.DataFrame(records, columns=["line_number", *names, "error_description"])
    error_df.to_csv(output_path, index=False, encoding="utf-8")

    logger.info(f"Exported {len(error_df)} malformed rows to {output_path}")
    return len(error_df)
