"""
Tests for reading the checklist and writing the tables

Tests cover:
- TSV parsing with NA and empty cells
- Missing columns and empty names
- CSV output format and all-or-nothing replacement
- meta.xml and ZIP bundle
"""

import csv
import json
from pathlib import Path
from unittest.mock import patch
from xml.etree import ElementTree as ET
from zipfile import ZipFile

import pytest

from dwc.archive import build_manifest, create_archive
from dwc.errors import InvalidInputError
from dwc.pipeline import build_checklist
from dwc.schema import DISTRIBUTION_TERMS, RESOURCE_RELATIONSHIP_TERMS, TAXON_TERMS
from io_utils.read import read_checklist
from io_utils.write import write_checklist, write_manifest

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def tables(fake_parser, settings):
    return build_checklist(read_checklist(DATA_DIR / "checklist.tsv"), fake_parser, settings)


class TestReadChecklist:
    def test_reads_records(self):
        records = read_checklist(DATA_DIR / "checklist.tsv")

        assert len(records) == 3
        assert records[0].hostPlant == "Salix alba, Salix fragilis"
        assert records[0].date_from == "3.V.2009"
        assert records[1].date_to is None

    def test_na_is_missing(self):
        records = read_checklist(DATA_DIR / "checklist.tsv")

        assert records[2].hostPlant is None
        assert records[2].establishmentMeans is None

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.tsv"
        path.write_text("scientificName\thostPlant\nPuccinia a\t\n", encoding="utf-8")

        with pytest.raises(InvalidInputError) as exc_info:
            read_checklist(path)
        assert "part" in str(exc_info.value)

    def test_empty_scientific_name(self, tmp_path):
        header = (DATA_DIR / "checklist.tsv").read_text(encoding="utf-8").splitlines()[0]
        path = tmp_path / "empty.tsv"
        path.write_text(header + "\n" + "\t".join([""] * 9) + "\n", encoding="utf-8")

        with pytest.raises(InvalidInputError) as exc_info:
            read_checklist(path)
        assert ":2" in str(exc_info.value)


class TestWriteChecklist:
    def test_headers_and_rows(self, tmp_path, tables):
        write_checklist(tmp_path, tables)

        for name, columns, count in [
            ("taxon.csv", TAXON_TERMS, 5),
            ("distribution.csv", DISTRIBUTION_TERMS, 3),
            ("resourcerelationship.csv", RESOURCE_RELATIONSHIP_TERMS, 3),
        ]:
            with (tmp_path / name).open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                rows = list(reader)
            assert reader.fieldnames == columns
            assert len(rows) == count

    def test_empty_values_not_na(self, tmp_path, tables):
        write_checklist(tmp_path, tables)

        content = (tmp_path / "taxon.csv").read_text(encoding="utf-8")
        assert "NA" not in content.split(",")
        assert ",Plantae,,," in content

    def test_existing_outputs_kept_on_failure(self, tmp_path, tables):
        (tmp_path / "taxon.csv").write_text("previous", encoding="utf-8")

        with patch("io_utils.write.write_table", side_effect=[None, OSError("disk full")]):
            with pytest.raises(OSError):
                write_checklist(tmp_path, tables)

        assert (tmp_path / "taxon.csv").read_text(encoding="utf-8") == "previous"
        assert not list(tmp_path.glob(".*.tmp"))


class TestArchive:
    def test_meta_xml(self, tmp_path, tables):
        write_checklist(tmp_path, tables)

        meta = create_archive(tmp_path, compress=False)

        ns = {"dwc": "http://rs.tdwg.org/dwc/text/"}
        root = ET.parse(meta).getroot()
        core = root.find("dwc:core", ns)
        assert core.get("rowType") == "http://rs.tdwg.org/dwc/terms/Taxon"
        assert core.find("dwc:files/dwc:location", ns).text == "taxon.csv"
        extensions = root.findall("dwc:extension", ns)
        assert [e.find("dwc:files/dwc:location", ns).text for e in extensions] == [
            "distribution.csv",
            "resourcerelationship.csv",
        ]
        terms = [f.get("term") for f in core.findall("dwc:field", ns)]
        assert "http://purl.org/dc/terms/license" in terms
        assert len(terms) == len(TAXON_TERMS)

    def test_zip_bundle(self, tmp_path, tables):
        write_checklist(tmp_path, tables)
        write_manifest(tmp_path, {"counts": tables.counts()})

        archive = create_archive(tmp_path, compress=True, version="1.2.0")

        assert archive.name == "dwca_v1.2.0.zip"
        with ZipFile(archive) as zf:
            assert set(zf.namelist()) == {
                "taxon.csv",
                "distribution.csv",
                "resourcerelationship.csv",
                "meta.xml",
                "manifest.json",
            }
        manifest = json.loads((tmp_path / "manifest.json").read_text(encoding="utf-8"))
        assert manifest["version"] == "1.2.0"
        assert manifest["counts"]["taxon"] == 5
        assert "taxon.csv" in manifest["file_checksums"]

    def test_missing_tables(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            create_archive(tmp_path)

    def test_bad_version(self, tmp_path, tables):
        write_checklist(tmp_path, tables)

        with pytest.raises(ValueError):
            create_archive(tmp_path, compress=True, version="v1")

    def test_manifest_version_set_only_by_export(self):
        manifest = build_manifest({"short_name": "rust-fungi"}, include_git_info=False)

        assert manifest["dataset"] == {"short_name": "rust-fungi"}
        assert "version" not in manifest
        assert "git_commit" not in manifest
