"""Utilities for creating Darwin Core Archives.

This module builds a ``meta.xml`` descriptor for the checklist: ``taxon.csv``
is the core, ``distribution.csv`` and ``resourcerelationship.csv`` are
extensions joined on ``taxonID``.  Together with ``manifest.json`` the files
can optionally be bundled into a versioned ZIP file to form a complete
Darwin Core Archive (DwC-A).
"""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element, SubElement, tostring
from xml.dom import minidom
from zipfile import ZipFile, ZIP_DEFLATED
from typing import Any, Dict, List
from datetime import datetime, timezone
import subprocess
import re
import hashlib
import logging

from .schema import DISTRIBUTION_TERMS, RESOURCE_RELATIONSHIP_TERMS, TAXON_TERMS

logger = logging.getLogger(__name__)

TAXON_FILE = "taxon.csv"
DISTRIBUTION_FILE = "distribution.csv"
RESOURCE_RELATIONSHIP_FILE = "resourcerelationship.csv"
TABLE_FILES = [TAXON_FILE, DISTRIBUTION_FILE, RESOURCE_RELATIONSHIP_FILE]


def _dwc_term(term: str) -> str:
    """Return the full Darwin Core URI for a term."""

    return f"http://rs.tdwg.org/dwc/terms/{term}"


def _dcterms(term: str) -> str:
    return f"http://purl.org/dc/terms/{term}"


# Terms that live in Dublin Core rather than Darwin Core
DCTERMS = {"language", "license", "rightsHolder", "bibliographicCitation", "source"}


def term_uri(term: str) -> str:
    return _dcterms(term) if term in DCTERMS else _dwc_term(term)


# (file, row type, columns); the first entry is the core
ARCHIVE_TABLES = [
    (TAXON_FILE, _dwc_term("Taxon"), TAXON_TERMS),
    (DISTRIBUTION_FILE, "http://rs.gbif.org/terms/1.0/Distribution", DISTRIBUTION_TERMS),
    (
        RESOURCE_RELATIONSHIP_FILE,
        _dwc_term("ResourceRelationship"),
        RESOURCE_RELATIONSHIP_TERMS,
    ),
]

SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")


def build_manifest(
    dataset: Dict[str, Any] | None = None,
    include_git_info: bool = True,
) -> Dict[str, Any]:
    """Return run metadata for checklist exports.

    Parameters
    ----------
    dataset:
        Dataset description (name, ID, short name) recorded as-is.
    include_git_info:
        Whether to include the current git commit.
    """

    manifest: Dict[str, Any] = {
        "format_version": "1.0.0",
        "export_type": "darwin_core_checklist",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "dataset": dataset or {},
    }

    if include_git_info:
        try:
            commit = subprocess.check_output(
                ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
            ).strip()
            manifest["git_commit"] = commit
            manifest["git_commit_short"] = commit[:7]
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("Git information not available")
            manifest["git_commit"] = "unknown"

    return manifest


def build_meta_xml(output_dir: Path) -> Path:
    """Create ``meta.xml`` for the checklist archive.

    Parameters
    ----------
    output_dir:
        Directory containing the three checklist tables.

    Returns
    -------
    Path to the written ``meta.xml`` file.
    """

    output_dir.mkdir(parents=True, exist_ok=True)
    root = Element("archive", xmlns="http://rs.tdwg.org/dwc/text/")

    for position, (location, row_type, columns) in enumerate(ARCHIVE_TABLES):
        element = SubElement(
            root,
            "core" if position == 0 else "extension",
            {
                "encoding": "UTF-8",
                "linesTerminatedBy": "\\n",
                "fieldsTerminatedBy": ",",
                "fieldsEnclosedBy": '"',
                "ignoreHeaderLines": "1",
                "rowType": row_type,
            },
        )
        files_el = SubElement(element, "files")
        SubElement(files_el, "location").text = location
        SubElement(element, "id" if position == 0 else "coreid", index="0")
        for idx, term in enumerate(columns):
            SubElement(element, "field", index=str(idx), term=term_uri(term))

    xml_bytes = tostring(root, encoding="utf-8")
    pretty = minidom.parseString(xml_bytes).toprettyxml(indent="  ", encoding="UTF-8")
    meta_path = output_dir / "meta.xml"
    meta_path.write_bytes(pretty)
    return meta_path


def file_checksums(output_dir: Path, names: List[str]) -> Dict[str, Dict[str, Any]]:
    checksums = {}
    for name in names:
        file_path = output_dir / name
        if file_path.exists():
            content = file_path.read_bytes()
            checksums[name] = {
                "sha256": hashlib.sha256(content).hexdigest(),
                "size_bytes": len(content),
            }
    return checksums


def create_archive(
    output_dir: Path,
    *,
    compress: bool = False,
    version: str | None = None,
    include_checksums: bool = True,
) -> Path:
    """Write ``meta.xml`` next to the tables and optionally zip them.

    Returns
    -------
    Path to ``meta.xml`` if ``compress`` is ``False``; otherwise the path to the
    created ``dwca_v{version}.zip``.
    """

    missing = [name for name in TABLE_FILES if not (output_dir / name).exists()]
    if missing:
        raise FileNotFoundError(f"Missing checklist tables in {output_dir}: {', '.join(missing)}")

    meta_path = build_meta_xml(output_dir)
    if not compress:
        return meta_path

    if version is None or not SEMVER_RE.match(version):
        raise ValueError("version must be provided and follow semantic versioning")

    from io_utils.write import read_manifest, write_manifest

    manifest = read_manifest(output_dir)
    manifest["version"] = version
    if include_checksums:
        manifest["file_checksums"] = file_checksums(output_dir, TABLE_FILES + ["meta.xml"])
    write_manifest(output_dir, manifest)

    archive_path = output_dir / f"dwca_v{version}.zip"
    logger.info(f"Creating archive: {archive_path.name}")
    with ZipFile(archive_path, "w", ZIP_DEFLATED) as zf:
        for name in TABLE_FILES + ["meta.xml", "manifest.json"]:
            file_path = output_dir / name
            if file_path.exists():
                zf.write(file_path, arcname=name)
            else:
                logger.warning(f"Requested file {name} not found, skipping")
    return archive_path
