from pathlib import Path
from typing import List
import csv
import hashlib
import logging

from dwc.errors import InvalidInputError
from dwc.schema import RAW_COLUMNS, RawRecord

logger = logging.getLogger(__name__)


def read_checklist(path: Path) -> List[RawRecord]:
    """Read the tab-separated source checklist.

    Args:
        path: UTF-8 encoded TSV file with a header row

    Returns:
        One :class:`RawRecord` per data row, in file order

    Raises:
        InvalidInputError: if columns are missing or a row has no scientificName
    """
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f, delimiter="\t")
        header = reader.fieldnames or []
        missing = [column for column in RAW_COLUMNS if column not in header]
        if missing:
            raise InvalidInputError(f"{path.name} is missing columns: {', '.join(missing)}")

        records = []
        # Line 1 is the header
        for line, row in enumerate(reader, start=2):
            record = RawRecord.model_validate({column: row.get(column) for column in RAW_COLUMNS})
            if not record.scientificName:
                raise InvalidInputError(f"{path.name}:{line} has an empty scientificName")
            records.append(record)

    logger.info("Read %d records from %s", len(records), path)
    return records


def compute_sha256(path: Path) -> str:
    """Compute the SHA256 hash of a file.

    Args:
        path: Path to file

    Returns:
        Hex string of SHA256 hash
    """
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()
