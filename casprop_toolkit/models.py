"""Result types shared by the lookup pipeline and the CSV writer.

A lookup ends in exactly one of two shapes: `LookupSuccess` carrying a full `CompoundRecord`, or `LookupFailure`
carrying only an error message. `OutputRow` flattens either shape into the seven output columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Union

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"

OUTPUT_COLUMNS = (
    "cas_number",
    "chemical_name",
    "smiles_code",
    "molecular_formula",
    "structure_image_url",
    "status",
    "error",
)

# Google Sheets renders this formula as an inline image.
IMAGE_URL_TEMPLATE = '=IMAGE("https://pubchem.ncbi.nlm.nih.gov/rest/pug/compound/cid/{cid}/PNG")'


def structure_image_formula(cid: int) -> str:
    return IMAGE_URL_TEMPLATE.format(cid=int(cid))


@dataclass(frozen=True)
class CompoundRecord:
    cid: int
    chemical_name: str = ""
    smiles_code: str = ""
    molecular_formula: str = ""
    structure_image_url: str = ""


@dataclass(frozen=True)
class LookupSuccess:
    record: CompoundRecord
    status: Literal["success"] = STATUS_SUCCESS


@dataclass(frozen=True)
class LookupFailure:
    error: str
    status: Literal["failed"] = STATUS_FAILED


LookupResult = Union[LookupSuccess, LookupFailure]


@dataclass(frozen=True)
class OutputRow:
    cas_number: str
    chemical_name: str = ""
    smiles_code: str = ""
    molecular_formula: str = ""
    structure_image_url: str = ""
    status: str = STATUS_FAILED
    error: str = ""

    @classmethod
    def from_result(cls, cas_number: str, result: LookupResult) -> "OutputRow":
        if isinstance(result, LookupSuccess):
            rec = result.record
            return cls(
                cas_number=cas_number,
                chemical_name=rec.chemical_name,
                smiles_code=rec.smiles_code,
                molecular_formula=rec.molecular_formula,
                structure_image_url=rec.structure_image_url,
                status=STATUS_SUCCESS,
            )
        return cls(cas_number=cas_number, status=STATUS_FAILED, error=result.error or "Unknown error")

    def to_dict(self) -> Dict[str, str]:
        return {c: getattr(self, c) for c in OUTPUT_COLUMNS}
