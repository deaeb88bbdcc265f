"""Hospital Frailty Risk Score (HFRS) reference table.

Based on Gilbert et al. (2018) Lancet 391: 1775-82:
"Development and validation of a Hospital Frailty Risk Score focusing on
older people in acute care settings using electronic hospital records"

Each entry pairs a 3-character ICD-10 fragment with its weight. Fragments are
matched as literal substrings of a free-text diagnosis field, so "F00" also
matches "F001" or "||F009 ,I10X".

The table is a process-wide constant. Entries are frozen and the keyed views
returned by reference_table() are read-only.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeWeight:
    """One row of the HFRS reference table.

    Attributes:
        fragment: 3-character code prefix searched for in the diagnosis text
        weight: Score contributed when the fragment is present
        description: ICD-10 category title
        column: Output field stem the match is written to. Equals the
            fragment for every entry except the delirium row, which the
            published scoring script writes into the N39 field.
    """

    fragment: str
    weight: float
    description: str = ""
    column: str | None = None

    def __post_init__(self):
        if self.column is None:
            object.__setattr__(self, "column", self.fragment)

    @property
    def shadowed(self) -> bool:
        """True if this entry writes to another fragment's field."""
        return self.column != self.fragment


# Order matters only for entries sharing an output field: the later one wins.
HFRS_CODES: tuple[CodeWeight, ...] = (
    CodeWeight("F00", 7.1, "Dementia in Alzheimer's disease"),
    CodeWeight("G81", 4.4, "Hemiplegia"),
    CodeWeight("G30", 4.0, "Alzheimer's disease"),
    CodeWeight("I69", 3.7, "Sequelae of cerebrovascular disease"),
    CodeWeight("R29", 3.6, "Other symptoms involving nervous and musculoskeletal systems"),
    CodeWeight("N39", 3.2, "Other disorders of urinary system"),
    CodeWeight("F05", 3.2, "Delirium not induced by alcohol", column="N39"),
    CodeWeight("W19", 3.2, "Unspecified fall"),
    CodeWeight("S00", 3.2, "Superficial injury of head"),
    CodeWeight("R31", 3.0, "Unspecified haematuria"),
    CodeWeight("B96", 2.9, "Other bacterial agents as cause of disease"),
    CodeWeight("R41", 2.7, "Other symptoms involving cognitive functions"),
    CodeWeight("R26", 2.6, "Abnormalities of gait and mobility"),
    CodeWeight("I67", 2.6, "Other cerebrovascular diseases"),
    CodeWeight("R56", 2.6, "Convulsions not elsewhere classified"),
    CodeWeight("R40", 2.5, "Somnolence stupor and coma"),
    CodeWeight("T83", 2.4, "Complications of genitourinary prosthetic devices"),
    CodeWeight("S06", 2.4, "Intracranial injury"),
    CodeWeight("S42", 2.3, "Fracture of shoulder and upper arm"),
    CodeWeight("E87", 2.3, "Other disorders of fluid electrolyte and acid-base balance"),
    CodeWeight("M25", 2.3, "Other joint disorders not elsewhere classified"),
    CodeWeight("E86", 2.3, "Volume depletion"),
    CodeWeight("R54", 2.2, "Senility"),
    CodeWeight("Z50", 2.1, "Care involving use of rehabilitation procedures"),
    CodeWeight("F03", 2.1, "Unspecified dementia"),
    CodeWeight("W18", 2.1, "Other fall on same level"),
    CodeWeight("Z75", 2.0, "Problems related to medical facilities and other health care"),
    CodeWeight("F01", 2.0, "Vascular dementia"),
    CodeWeight("S80", 2.0, "Superficial injury of lower leg"),
    CodeWeight("L03", 2.0, "Cellulitis"),
    CodeWeight("H54", 1.9, "Blindness and low vision"),
    CodeWeight("E53", 1.9, "Deficiency of other B group vitamins"),
    CodeWeight("Z60", 1.8, "Problems related to social environment"),
    CodeWeight("G20", 1.8, "Parkinson's disease"),
    CodeWeight("R55", 1.8, "Syncope and collapse"),
    CodeWeight("S22", 1.8, "Fracture of ribs sternum and thoracic spine"),
    CodeWeight("K59", 1.8, "Other functional intestinal disorders"),
    CodeWeight("N17", 1.8, "Acute renal failure"),
    CodeWeight("L89", 1.7, "Decubitus ulcer"),
    CodeWeight("Z22", 1.7, "Carrier of infectious disease"),
    CodeWeight("B95", 1.7, "Streptococcus and staphylococcus as cause of disease"),
    CodeWeight("N19", 1.6, "Unspecified renal failure"),
    CodeWeight("A41", 1.6, "Other septicaemia"),
    CodeWeight("L97", 1.6, "Ulcer of lower limb not elsewhere classified"),
    CodeWeight("R44", 1.6, "Other symptoms involving general sensations and perceptions"),
    CodeWeight("K26", 1.6, "Duodenal ulcer"),
    CodeWeight("I95", 1.6, "Hypotension"),
    CodeWeight("Z87", 1.5, "Personal history of other diseases and conditions"),
    CodeWeight("J96", 1.5, "Respiratory failure not elsewhere classified"),
    CodeWeight("X59", 1.5, "Exposure to unspecified factor"),
    CodeWeight("M19", 1.5, "Other arthrosis"),
    CodeWeight("G40", 1.5, "Epilepsy"),
    CodeWeight("M81", 1.4, "Osteoporosis without pathological fracture"),
    CodeWeight("S72", 1.4, "Fracture of femur"),
    CodeWeight("S32", 1.4, "Fracture of lumbar spine and pelvis"),
    CodeWeight("E16", 1.4, "Other disorders of pancreatic internal secretion"),
    CodeWeight("R94", 1.4, "Abnormal results of function studies"),
    CodeWeight("N18", 1.4, "Chronic renal failure"),
    CodeWeight("R33", 1.3, "Retention of urine"),
    CodeWeight("R69", 1.3, "Unknown and unspecified causes of morbidity"),
    CodeWeight("N28", 1.3, "Other disorders of kidney and ureter not elsewhere classified"),
    CodeWeight("R32", 1.2, "Unspecified urinary incontinence"),
    CodeWeight("G31", 1.2, "Other degenerative diseases of nervous system"),
    CodeWeight("Y95", 1.2, "Nosocomial condition"),
    CodeWeight("S09", 1.2, "Other and unspecified injuries of head"),
    CodeWeight("R45", 1.2, "Symptoms and signs involving emotional state"),
    CodeWeight("G45", 1.2, "Transient cerebral ischaemic attacks"),
    CodeWeight("S01", 1.1, "Open wound of head"),
    CodeWeight("A04", 1.1, "Other bacterial intestinal infections"),
    CodeWeight("A09", 1.1, "Diarrhoea and gastroenteritis of presumed infectious origin"),
    CodeWeight("J18", 1.1, "Pneumonia organism unspecified"),
    CodeWeight("Z74", 1.1, "Problems related to care-provider dependency"),
    CodeWeight("M79", 1.1, "Other soft tissue disorders not elsewhere classified"),
    CodeWeight("W06", 1.1, "Fall involving bed"),
    CodeWeight("J69", 1.0, "Pneumonitis due to solids and liquids"),
    CodeWeight("R47", 1.0, "Speech disturbances not elsewhere classified"),
    CodeWeight("E55", 1.0, "Vitamin D deficiency"),
    CodeWeight("Z93", 1.0, "Artificial opening status"),
    CodeWeight("R02", 1.0, "Gangrene not elsewhere classified"),
    CodeWeight("R63", 1.0, "Symptoms and signs concerning food and fluid intake"),
    CodeWeight("H91", 0.9, "Other hearing loss"),
    CodeWeight("W10", 0.9, "Fall on and from stairs and steps"),
    CodeWeight("W01", 0.9, "Fall on same level from slipping tripping and stumbling"),
    CodeWeight("E05", 0.9, "Thyrotoxicosis hyperthyroidism"),
    CodeWeight("M41", 0.9, "Scoliosis"),
    CodeWeight("R13", 0.8, "Dysphagia"),
    CodeWeight("Z99", 0.8, "Dependence on enabling machines and devices"),
    CodeWeight("U80", 0.8, "Agent resistant to penicillin and related antibiotics"),
    CodeWeight("M80", 0.8, "Osteoporosis with pathological fracture"),
    CodeWeight("K92", 0.8, "Other diseases of digestive system"),
    CodeWeight("I63", 0.8, "Cerebral infarction"),
    CodeWeight("J22", 0.7, "Unspecified acute lower respiratory infection"),
    CodeWeight("N20", 0.7, "Calculus of kidney and ureter"),
    CodeWeight("F10", 0.7, "Mental and behavioural disorders due to use of alcohol"),
    CodeWeight("Y84", 0.7, "Other medical procedures as cause of abnormal reaction"),
    CodeWeight("R00", 0.7, "Abnormalities of heart beat"),
    CodeWeight("Z73", 0.6, "Problems related to life-management difficulty"),
    CodeWeight("R79", 0.6, "Other abnormal findings of blood chemistry"),
    CodeWeight("Z91", 0.5, "Personal history of risk-factors not elsewhere classified"),
    CodeWeight("S51", 0.5, "Open wound of forearm"),
    CodeWeight("F32", 0.5, "Depressive episode"),
    CodeWeight("M48", 0.5, "Spinal stenosis"),
    CodeWeight("E83", 0.4, "Disorders of mineral metabolism"),
    CodeWeight("M15", 0.4, "Polyarthrosis"),
    CodeWeight("D64", 0.4, "Other anaemias"),
    CodeWeight("L08", 0.4, "Other local infections of skin and subcutaneous tissue"),
    CodeWeight("R11", 0.3, "Nausea and vomiting"),
    CodeWeight("K52", 0.3, "Other noninfective gastroenteritis and colitis"),
    CodeWeight("R50", 0.1, "Fever of unknown origin"),
)


@functools.lru_cache(maxsize=None)
def reference_table(
    collapse_duplicates: bool = True,
) -> MappingProxyType[str, CodeWeight]:
    """Build the read-only field -> entry view of HFRS_CODES.

    Args:
        collapse_duplicates: If True, entries are keyed by their output
            column and a later entry replaces an earlier one for the same
            column (N39 is then scored from the F05 fragment only). If False,
            every entry is keyed by its own fragment.

    Returns:
        Mapping from output field stem to the entry scored into it, in
        table order.
    """
    table: dict[str, CodeWeight] = {}
    for entry in HFRS_CODES:
        key = entry.column if collapse_duplicates else entry.fragment
        if key in table:
            logger.debug(
                "HFRS field %s: %s (%.1f) replaces %s (%.1f)",
                key,
                entry.fragment,
                entry.weight,
                table[key].fragment,
                table[key].weight,
            )
        table[key] = entry
    return MappingProxyType(table)


def indicator_columns(prefix: str = "icd_", collapse_duplicates: bool = True) -> list[str]:
    """Return the indicator field names added to scored records, in order."""
    return [f"{prefix}{key}" for key in reference_table(collapse_duplicates)]
