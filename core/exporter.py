"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/exporter.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Export service for writing identity records to CSV files with
                a fixed bilingual column layout. Output is UTF-8 with BOM so
                spreadsheet tools detect the Bengali text correctly.
------------------------------------------------------------------------------
"""

import csv
import io
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from core.logger import get_logger
from core.models.record import IdentityRecord

logger = get_logger("export")

# Column label -> record attribute, in export order
CSV_COLUMNS: Dict[str, str] = {
    "NID Number": "nid_number",
    "Full Name (EN)": "full_name_en",
    "Full Name (BN)": "full_name_bn",
    "Date of Birth": "date_of_birth",
    "Father (EN)": "father_name_en",
    "Father (BN)": "father_name_bn",
    "Mother (EN)": "mother_name_en",
    "Mother (BN)": "mother_name_bn",
    "Voter Serial": "voter_serial",
    "Address (EN)": "address_en",
    "Address (BN)": "address_bn",
    "Blood Group": "blood_group",
    "Source File": "source_file",
}


class RecordExporter:
    """
    Handles exporting identity records to CSV.
    """

    @staticmethod
    def to_csv_text(records: Sequence[IdentityRecord]) -> str:
        """
        Serializes records to CSV text.

        The header line is plain, every data field is enclosed in double
        quotes with embedded quotes doubled.
        """
        rows: List[Dict[str, Any]] = []
        for rec in records:
            rows.append({label: getattr(rec, attr) or "" for label, attr in CSV_COLUMNS.items()})

        df = pd.DataFrame(rows, columns=list(CSV_COLUMNS.keys()), dtype=str)

        buffer = io.StringIO()
        buffer.write(",".join(CSV_COLUMNS.keys()) + "\n")
        df.to_csv(buffer, header=False, index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
        return buffer.getvalue()

    @staticmethod
    def build_filename(basename: str, today: Optional[date] = None) -> str:
        """Returns '{basename}_{YYYY-MM-DD}.csv' using the UTC date by default."""
        if today is None:
            today = datetime.now(timezone.utc).date()
        return f"{basename}_{today.isoformat()}.csv"

    @staticmethod
    def export_csv(
        records: Sequence[IdentityRecord],
        basename: str,
        output_dir: Union[str, Path],
        today: Optional[date] = None
    ) -> Optional[Path]:
        """
        Writes records to '{output_dir}/{basename}_{date}.csv'.

        Args:
            records: Records to export, in order.
            basename: File name prefix, e.g. 'search_results'.
            output_dir: Target folder, created if missing.
            today: Date used in the file name (UTC today if omitted).

        Returns:
            The written path, or None when there was nothing to export.
        """
        if not records:
            return None

        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / RecordExporter.build_filename(basename, today)

        text = RecordExporter.to_csv_text(records)
        with open(path, "w", encoding="utf-8-sig", newline="") as f:
            f.write(text)

        logger.info(f"Exported {len(records)} record(s) to {path}")
        return path
