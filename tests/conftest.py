"""Shared fixtures: settings from the packaged config and an offline name parser."""

from typing import Any, Dict, Iterable, List, Optional, Sequence

import pytest

from dwc.schema import RawRecord
from dwc.settings import ChecklistSettings


class FakeNameParser:
    """Offline stand-in for the GBIF parser.

    Splits names on whitespace (genus, epithet) unless ``overrides`` holds a
    prepared response.  Names in ``unparseable`` are left out of the result.
    """

    def __init__(
        self,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None,
        unparseable: Iterable[str] = (),
    ):
        self.overrides = overrides or {}
        self.unparseable = set(unparseable)
        self.calls: List[List[str]] = []

    def __call__(self, names: Sequence[str]) -> List[Dict[str, Any]]:
        self.calls.append(list(names))
        results = []
        for name in names:
            if name in self.unparseable:
                continue
            if name in self.overrides:
                results.append({"scientificName": name, **self.overrides[name]})
                continue
            parts = name.split()
            response: Dict[str, Any] = {"scientificName": name, "genusOrAbove": parts[0]}
            if len(parts) > 1:
                response["specificEpithet"] = parts[1]
                response["rankMarker"] = "sp."
            results.append(response)
        return results


@pytest.fixture
def settings():
    """Settings from the packaged default configuration."""
    return ChecklistSettings.load()


@pytest.fixture
def fake_parser():
    return FakeNameParser()


@pytest.fixture
def sample_records():
    """Three parasites sharing the host Salix alba."""
    return [
        RawRecord(
            scientificName="Melampsora allii-fragilis",
            hostPlant="Salix alba, Salix fragilis",
            family="Melampsoraceae",
            part="1",
            page="45",
            date_from="3.V.2009",
            date_to="2009",
            occurrenceStatus="present",
            establishmentMeans="native",
        ),
        RawRecord(
            scientificName="Melampsora salicis-albae",
            hostPlant="Salix alba",
            family="Melampsoraceae",
            part="1",
            page="52",
            date_from="V.2009",
            occurrenceStatus="present",
            establishmentMeans="alien",
        ),
        RawRecord(
            scientificName="Puccinia malvacearum",
            hostPlant=None,
            family="Pucciniaceae",
            part="3",
            page="210",
            occurrenceStatus="present",
        ),
    ]


@pytest.fixture
def make_parser():
    """Factory for parsers with prepared responses or unparseable names."""
    return FakeNameParser
