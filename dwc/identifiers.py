from __future__ import annotations

import hashlib
from typing import Iterable, List

from .errors import InvalidInputError
from .schema import Taxon


def taxon_id(scientific_name: str, dataset_short_name: str) -> str:
    """Return the identifier of the taxon called ``scientific_name``.

    The identifier only depends on the name, so a host listed under several
    parasites always receives the same ID.  Format:
    ``{dataset_short_name}:taxon:{md5 of the name}``.
    """

    if not scientific_name or not scientific_name.strip():
        raise InvalidInputError("Cannot derive a taxonID from an empty scientificName")
    if not dataset_short_name:
        raise InvalidInputError("Dataset short name is required to derive a taxonID")
    digest = hashlib.md5(scientific_name.encode("utf-8")).hexdigest()
    return f"{dataset_short_name}:taxon:{digest}"


def assign_taxon_ids(taxa: Iterable[Taxon], dataset_short_name: str) -> List[Taxon]:
    return [
        taxon.model_copy(update={"taxonID": taxon_id(taxon.scientificName, dataset_short_name)})
        for taxon in taxa
    ]
