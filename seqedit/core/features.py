"""
Feature coordinate adjustment and feature templates.

adjust_features() keeps annotations anchored to the same residues when an
insertion or deletion changes the sequence length.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .models import Feature, FeatureType

logger = logging.getLogger(__name__)


def _shift_for_insertion(coord: int, position: int, delta: int) -> int:
    # Boundaries at the insertion point move with the residues after it
    return coord + delta if coord >= position else coord


def _shift_for_deletion(coord: int, position: int, removed: int) -> int:
    deletion_end = position + removed
    if coord >= deletion_end:
        return coord - removed
    if coord > position:
        return position
    return coord


def adjust_features(
    features: Iterable[Feature],
    edit_position: int,
    length_delta: int,
) -> List[Feature]:
    """
    Re-map feature coordinates after an insertion or deletion.

    Args:
        features: Features anchored to the pre-edit sequence
        edit_position: Index where residues were inserted, or start of the
            deleted span
        length_delta: Number of residues inserted (> 0) or removed (< 0)

    Returns:
        New list of cloned features. Features whose range collapses
        (start >= end) are dropped. The input is not modified.
    """
    adjusted = []
    for feature in features:
        moved = feature.clone()
        if length_delta > 0:
            moved.start = _shift_for_insertion(feature.start, edit_position, length_delta)
            moved.end = _shift_for_insertion(feature.end, edit_position, length_delta)
        elif length_delta < 0:
            moved.start = _shift_for_deletion(feature.start, edit_position, -length_delta)
            moved.end = _shift_for_deletion(feature.end, edit_position, -length_delta)

        if moved.start >= moved.end:
            logger.debug(
                f"Dropping feature '{feature.name}' ({feature.start}-{feature.end}): "
                f"range collapsed by edit at {edit_position} (delta {length_delta})"
            )
            continue
        adjusted.append(moved)

    return adjusted


@dataclass(frozen=True)
class FeatureTemplate:
    """Predefined annotation users can drop onto a selection."""
    name: str
    type: FeatureType
    color: str
    category: str
    description: str


FEATURE_TEMPLATES: List[FeatureTemplate] = [
    # Promoters
    FeatureTemplate('T7 promoter', FeatureType.PROMOTER, '#fbbf24', 'Promoters',
                    'Bacteriophage T7 RNA polymerase promoter'),
    FeatureTemplate('lac promoter', FeatureType.PROMOTER, '#fbbf24', 'Promoters',
                    'E. coli lac operon promoter'),
    FeatureTemplate('CMV promoter', FeatureType.PROMOTER, '#fbbf24', 'Promoters',
                    'Cytomegalovirus immediate early promoter'),
    FeatureTemplate('tac promoter', FeatureType.PROMOTER, '#fbbf24', 'Promoters',
                    'Hybrid trp-lac promoter'),
    # Terminators
    FeatureTemplate('T7 terminator', FeatureType.TERMINATOR, '#fb7185', 'Terminators',
                    'T7 RNA polymerase terminator'),
    FeatureTemplate('rrnB T1 terminator', FeatureType.TERMINATOR, '#fb7185', 'Terminators',
                    'E. coli rrnB T1 transcription terminator'),
    # Tags
    FeatureTemplate('6xHis-tag', FeatureType.CDS, '#22d3ee', 'Tags',
                    'Hexahistidine affinity tag'),
    FeatureTemplate('FLAG-tag', FeatureType.CDS, '#22d3ee', 'Tags',
                    'DYKDDDDK peptide tag'),
    # Cleavage sites
    FeatureTemplate('TEV site', FeatureType.MISC_FEATURE, '#a78bfa', 'Cleavage sites',
                    'Tobacco Etch Virus protease cleavage site'),
    # Origins
    FeatureTemplate('pBR322 ori', FeatureType.ORIGIN, '#60a5fa', 'Origins',
                    'pBR322 origin of replication'),
    FeatureTemplate('ColE1 ori', FeatureType.ORIGIN, '#60a5fa', 'Origins',
                    'ColE1-type origin of replication'),
    FeatureTemplate('f1 ori', FeatureType.ORIGIN, '#60a5fa', 'Origins',
                    'f1 bacteriophage origin of replication'),
    # Selection markers
    FeatureTemplate('AmpR', FeatureType.RESISTANCE, '#f97316', 'Selection markers',
                    'Ampicillin resistance gene (beta-lactamase)'),
    FeatureTemplate('KanR', FeatureType.RESISTANCE, '#f97316', 'Selection markers',
                    'Kanamycin resistance gene'),
]

_TEMPLATES_BY_NAME = {t.name.lower(): t for t in FEATURE_TEMPLATES}


def feature_from_template(name: str, start: int, end: int, strand: int = 1) -> Feature:
    """
    Instantiate a feature from a named template.

    Raises:
        ValueError: If no template has that name
    """
    template = _TEMPLATES_BY_NAME.get(name.lower())
    if template is None:
        raise ValueError(f"Unknown feature template: {name}")
    return Feature(
        name=template.name,
        type=template.type,
        start=start,
        end=end,
        strand=strand,
        color=template.color,
        metadata={'template': template.name, 'description': template.description},
    )
