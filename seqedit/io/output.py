"""
Tabular output for SEQEDIT analysis results and edit history.
"""

from pathlib import Path
from typing import Iterable, List, Optional
import pandas as pd
import logging

from ..analysis.types import GCPoint, MotifMatch, ORF
from ..core.models import MutationScar

logger = logging.getLogger(__name__)

ORF_COLUMNS = [
    'start', 'end', 'strand', 'frame', 'length',
    'amino_acids', 'start_codon', 'stop_codon',
]
GC_COLUMNS = ['position', 'gc']
MOTIF_COLUMNS = ['start', 'end', 'matched']
SCAR_COLUMNS = ['id', 'position', 'type', 'original', 'inserted', 'created_at']


def orfs_to_dataframe(orfs: Iterable[ORF]) -> pd.DataFrame:
    """One row per ORF, with a '+1'..'-3' frame label column."""
    rows = []
    for orf in orfs:
        row = orf.to_dict()
        row['frame_label'] = orf.frame_label
        rows.append(row)
    return pd.DataFrame(rows, columns=ORF_COLUMNS + ['frame_label'])


def gc_to_dataframe(points: Iterable[GCPoint]) -> pd.DataFrame:
    return pd.DataFrame([p.to_dict() for p in points], columns=GC_COLUMNS)


def motifs_to_dataframe(matches: Iterable[MotifMatch]) -> pd.DataFrame:
    return pd.DataFrame([m.to_dict() for m in matches], columns=MOTIF_COLUMNS)


def scars_to_dataframe(
    scars: Iterable[MutationScar],
    most_recent_first: bool = False,
) -> pd.DataFrame:
    """
    Scar ledger as a table.

    Args:
        scars: Scars in ledger (creation) order
        most_recent_first: Reverse for changelog display

    Returns:
        DataFrame with a 'description' column alongside the scar fields
    """
    rows = []
    for scar in scars:
        row = scar.to_dict()
        row['description'] = scar.describe()
        rows.append(row)
    if most_recent_first:
        rows.reverse()
    return pd.DataFrame(rows, columns=SCAR_COLUMNS + ['description'])


def write_table_tsv(df: pd.DataFrame, output_path: Path) -> Path:
    """
    Write a result table to TSV.

    Args:
        df: Table to write
        output_path: Path for output TSV

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    df.to_csv(output_path, sep='\t', index=False)

    logger.info(f"Wrote {len(df)} rows to {output_path}")

    return output_path


def generate_changelog_report(
    scars: List[MutationScar],
    output_path: Path,
    title: Optional[str] = None,
) -> Path:
    """
    Write the edit history of a block as a markdown changelog.

    Args:
        scars: Scars in ledger order
        output_path: Path for output markdown file
        title: Heading for the report

    Returns:
        Path to written file
    """
    with open(output_path, 'w') as f:
        f.write(f"# {title or 'Edit History'}\n\n")

        counts = {'substitution': 0, 'insertion': 0, 'deletion': 0}
        for scar in scars:
            counts[scar.type.value] += 1

        f.write("## Overview\n\n")
        f.write(f"- **Edits:** {len(scars)}\n")
        f.write(f"- **Substitutions:** {counts['substitution']}\n")
        f.write(f"- **Insertions:** {counts['insertion']}\n")
        f.write(f"- **Deletions:** {counts['deletion']}\n\n")

        if scars:
            f.write("## Changes (most recent first)\n\n")
            for scar in reversed(scars):
                f.write(f"- {scar.describe()}\n")
            f.write("\n")

    logger.info(f"Wrote changelog to {output_path}")

    return output_path
