"""
I/O modules for SEQEDIT.
"""

from .output import (
    generate_changelog_report,
    gc_to_dataframe,
    motifs_to_dataframe,
    orfs_to_dataframe,
    scars_to_dataframe,
    write_table_tsv,
)

__all__ = [
    'orfs_to_dataframe',
    'gc_to_dataframe',
    'motifs_to_dataframe',
    'scars_to_dataframe',
    'write_table_tsv',
    'generate_changelog_report',
]
