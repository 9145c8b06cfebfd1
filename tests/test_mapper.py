"""
Tests for the output table builders

Tests cover:
- Taxon rows with dataset constants and role classification
- Distribution rows for parasites only
- Establishment means recoding
- Resource relationships per interaction
"""

import pytest

from dwc.errors import ChecklistError
from dwc.identifiers import taxon_id
from dwc.mapper import (
    add_classification,
    build_distribution_rows,
    build_resource_relationship_rows,
    build_taxon_rows,
)
from dwc.normalize import normalize_establishment_means
from dwc.schema import Interaction, RawRecord, ResourceRelation, Taxon
from qc.report import UNMAPPED_ESTABLISHMENT_MEANS, QualityReport


def _parasite(name, **record_fields):
    return Taxon(
        scientificName=name,
        resourceRelation=ResourceRelation.PARASITE,
        taxonID=taxon_id(name, "rust-fungi"),
        bibliographicCitation=f"Citation of {name}",
        record=RawRecord(scientificName=name, **record_fields),
    )


def _host(name):
    return Taxon(
        scientificName=name,
        resourceRelation=ResourceRelation.HOST,
        taxonID=taxon_id(name, "rust-fungi"),
        bibliographicCitation="Host citation",
    )


class TestEstablishmentMeans:
    @pytest.mark.parametrize(
        "value,expected",
        [("alien", "introduced"), (None, ""), ("", ""), ("native", "native")],
    )
    def test_recode(self, value, expected):
        assert normalize_establishment_means(value) == expected

    def test_unknown_value_passes_through_and_is_reported(self):
        report = QualityReport()

        assert normalize_establishment_means("cryptogenic", report) == "cryptogenic"
        assert report.by_code(UNMAPPED_ESTABLISHMENT_MEANS)

    @pytest.mark.parametrize("value", ["Native", "ALIEN", "Introduced"])
    def test_other_spellings_pass_through_unchanged(self, value):
        report = QualityReport()

        assert normalize_establishment_means(value, report) == value
        assert report.by_code(UNMAPPED_ESTABLISHMENT_MEANS)


class TestTaxonRows:
    def test_classification_by_role(self, settings):
        taxa = add_classification([_parasite("Puccinia a"), _host("Salix alba")])

        rows = build_taxon_rows(taxa, settings)

        assert (rows[0].kingdom, rows[0].phylum, rows[0].order) == (
            "Fungi",
            "Basidiomycota",
            "Uredinales",
        )
        host = rows[1].to_dict()
        assert (host["kingdom"], host["phylum"], host["order"]) == ("Plantae", "", "")

    def test_dataset_constants(self, settings):
        row = build_taxon_rows([_host("Salix alba")], settings)[0]

        assert row.language == "en"
        assert row.license == "http://creativecommons.org/publicdomain/zero/1.0/"
        assert row.nomenclaturalCode == "ICN"
        assert row.datasetName == settings.dataset.name
        assert row.rightsHolder == settings.dataset.rights_holder
        assert row.taxonID == taxon_id("Salix alba", "rust-fungi")


class TestDistributionRows:
    def test_parasites_only(self, settings):
        taxa = [_parasite("Puccinia a"), _host("Salix alba")]

        rows = build_distribution_rows(taxa, settings)

        assert [r.taxonID for r in rows] == [taxa[0].taxonID]

    def test_fields(self, settings):
        taxa = [
            _parasite(
                "Puccinia a",
                date_from="3.V.2009",
                date_to="2009",
                occurrenceStatus="present",
                establishmentMeans="alien",
            )
        ]

        row = build_distribution_rows(taxa, settings)[0].to_dict()

        assert row == {
            "taxonID": taxa[0].taxonID,
            "locationID": "ISO_3166-2:BE",
            "locality": "Belgium",
            "countryCode": "BE",
            "occurrenceStatus": "present",
            "establishmentMeans": "introduced",
            "eventDate": "2009-05-03/2009",
            "source": "Citation of Puccinia a",
        }

    def test_missing_values_are_empty(self, settings):
        row = build_distribution_rows([_parasite("Puccinia a")], settings)[0].to_dict()

        assert row["establishmentMeans"] == ""
        assert row["eventDate"] == ""
        assert row["occurrenceStatus"] == ""


class TestResourceRelationshipRows:
    def test_one_row_per_interaction(self):
        a, b = _parasite("Puccinia a"), _parasite("Puccinia b")
        alba, fragilis = _host("Salix alba"), _host("Salix fragilis")
        interactions = [
            Interaction(parasite="Puccinia a", host="Salix alba"),
            Interaction(parasite="Puccinia a", host="Salix fragilis"),
            Interaction(parasite="Puccinia b", host="Salix alba"),
        ]

        rows = build_resource_relationship_rows([a, b, alba, fragilis], interactions)

        assert len(rows) == 3
        assert [r.resourceID for r in rows] == [alba.taxonID, fragilis.taxonID, alba.taxonID]
        assert rows[2].taxonID == b.taxonID

    def test_row_fields(self):
        parasite, host = _parasite("Puccinia a"), _host("Salix alba")

        row = build_resource_relationship_rows(
            [parasite, host], [Interaction(parasite="Puccinia a", host="Salix alba")]
        )[0]

        assert row.taxonID == parasite.taxonID
        assert row.relatedResourceID == parasite.taxonID
        assert row.resourceID == host.taxonID
        assert row.relationshipOfResource == "parasite of"
        assert row.relationshipAccordingTo == "Citation of Puccinia a"
        assert list(row.to_dict()) == [
            "taxonID",
            "resourceID",
            "relatedResourceID",
            "relationshipOfResource",
            "relationshipAccordingTo",
        ]

    def test_unknown_host_raises(self):
        with pytest.raises(ChecklistError):
            build_resource_relationship_rows(
                [_parasite("Puccinia a")], [Interaction(parasite="Puccinia a", host="Salix alba")]
            )
