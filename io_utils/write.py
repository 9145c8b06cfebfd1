from pathlib import Path
from typing import Any, Dict, Iterable, List, TYPE_CHECKING
import csv
import json
import logging
import os

from dwc.archive import DISTRIBUTION_FILE, RESOURCE_RELATIONSHIP_FILE, TAXON_FILE
from dwc.schema import DISTRIBUTION_TERMS, RESOURCE_RELATIONSHIP_TERMS, TAXON_TERMS

if TYPE_CHECKING:
    from dwc.pipeline import ChecklistTables

logger = logging.getLogger(__name__)


def write_manifest(output_dir: Path, meta: Dict[str, Any]) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / "manifest.json"
    manifest_path.write_text(json.dumps(meta, indent=2, ensure_ascii=False), encoding="utf-8")


def read_manifest(output_dir: Path) -> Dict[str, Any]:
    manifest_path = output_dir / "manifest.json"
    if not manifest_path.exists():
        return {}
    return json.loads(manifest_path.read_text(encoding="utf-8"))


def write_table(csv_path: Path, columns: List[str], rows: Iterable[Dict[str, Any]]) -> None:
    """Write ``rows`` as comma-separated values with a header; ``None`` becomes ``""``."""
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, lineterminator="\n")
        writer.writeheader()
        for row in rows:
            writer.writerow({k: "" if row.get(k) is None else row.get(k) for k in columns})


def write_checklist(output_dir: Path, tables: "ChecklistTables") -> List[Path]:
    """Write the three checklist tables to ``output_dir``.

    All tables are first written to temporary files; existing outputs are
    only replaced once every table has been written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    plan = [
        (TAXON_FILE, TAXON_TERMS, tables.taxon_rows),
        (DISTRIBUTION_FILE, DISTRIBUTION_TERMS, tables.distribution_rows),
        (RESOURCE_RELATIONSHIP_FILE, RESOURCE_RELATIONSHIP_TERMS, tables.resource_relationship_rows),
    ]
    staged = []
    try:
        for name, columns, rows in plan:
            tmp_path = output_dir / f".{name}.tmp"
            write_table(tmp_path, columns, (row.to_dict() for row in rows))
            staged.append((tmp_path, output_dir / name))
    except Exception:
        for name, _, _ in plan:
            (output_dir / f".{name}.tmp").unlink(missing_ok=True)
        raise

    written = []
    for tmp_path, final_path in staged:
        os.replace(tmp_path, final_path)
        written.append(final_path)
        logger.info("Wrote %s", final_path)
    return written
