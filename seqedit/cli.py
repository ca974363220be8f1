"""
Command-line interface for SEQEDIT.

SEQEDIT: sequence editing and analysis engine
"""

import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

import click
import yaml

from . import __version__
from .config import EditorConfig, parse_sequence_input

# Named keys inside an edit script, e.g. "AC{Backspace}G{Undo}"
KEY_TOKEN = re.compile(r'\{(\w+)\}|(.)', re.DOTALL)


def _setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def _load_config(config_path: Optional[str]) -> EditorConfig:
    if not config_path:
        return EditorConfig()
    try:
        return EditorConfig.from_yaml(Path(config_path))
    except (ValueError, TypeError, yaml.YAMLError) as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)


def _load_sequence(value: str) -> str:
    try:
        return parse_sequence_input(value)
    except ValueError as e:
        click.echo(f"Error loading sequence: {e}", err=True)
        sys.exit(1)


def parse_key_script(script: str) -> List[str]:
    """
    Split an edit script into key names.

    Plain characters are residue keys; {Name} is a named key such as
    {Backspace}, {Delete}, {ArrowLeft}, {Insert}, {Undo} or {Redo}.
    """
    return [named or char for named, char in KEY_TOKEN.findall(script)]


@click.group()
@click.version_option(version=__version__)
def cli():
    """SEQEDIT: sequence editing and analysis engine."""
    pass


@cli.command()
@click.argument('sequence')
@click.option('--window', '-w', type=int, default=None,
              help='Window size in residues (default: chosen from sequence length)')
@click.option('--step', '-s', type=int, default=None,
              help='Step between windows (default: chosen from sequence length)')
@click.option('--type', 'seq_type', type=click.Choice(['dna', 'rna', 'protein']), default='dna',
              help='Sequence type (default: dna)')
@click.option('--config', '-c', type=click.Path(exists=True),
              help='Editor configuration YAML')
@click.option('--output', '-o', type=click.Path(),
              help='Write the profile to this TSV instead of stdout')
def gc(sequence, window, step, seq_type, config, output):
    """
    Sliding-window GC content of SEQUENCE (a sequence or FASTA path).

    \b
    Example:
      seqedit gc GCGCATATGCGC --window 4 --step 2
    """
    from .analysis.gc import gc_content, gc_window
    from .core.models import SequenceType
    from .io.output import gc_to_dataframe, write_table_tsv

    cfg = _load_config(config)
    _setup_logging(cfg.log_level)
    seq = _load_sequence(sequence)

    try:
        points = gc_window(
            seq,
            window_size=window if window is not None else cfg.analysis.gc_window_size,
            step=step if step is not None else cfg.analysis.gc_step,
            sequence_type=SequenceType(seq_type),
            max_length=cfg.analysis.gc_max_length,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    df = gc_to_dataframe(points)
    if output:
        write_table_tsv(df, Path(output))
        click.echo(f"Wrote {len(df)} windows to {output}")
    else:
        click.echo(f"Overall GC: {gc_content(seq):.4f}")
        click.echo(df.to_string(index=False))


@cli.command()
@click.argument('sequence')
@click.option('--min-aa', type=int, default=None,
              help='Minimum ORF length in amino acids (default: 30)')
@click.option('--start-codon', 'start_codons', multiple=True,
              help='Start codon (repeatable, default: ATG)')
@click.option('--config', '-c', type=click.Path(exists=True),
              help='Editor configuration YAML')
@click.option('--output', '-o', type=click.Path(),
              help='Write ORFs to this TSV instead of stdout')
def orfs(sequence, min_aa, start_codons, config, output):
    """
    Six-frame ORF detection on SEQUENCE (a sequence or FASTA path).

    \b
    Example:
      seqedit orfs ATGAAATAG --min-aa 1
    """
    from .analysis.orf import find_orfs
    from .io.output import orfs_to_dataframe, write_table_tsv

    cfg = _load_config(config)
    _setup_logging(cfg.log_level)
    seq = _load_sequence(sequence)

    try:
        found = find_orfs(
            seq,
            min_amino_acids=min_aa if min_aa is not None else cfg.analysis.orf_min_amino_acids,
            start_codons=start_codons or cfg.analysis.start_codons,
            max_length=cfg.analysis.orf_max_length,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    df = orfs_to_dataframe(found)
    if output:
        write_table_tsv(df, Path(output))
        click.echo(f"Wrote {len(df)} ORFs to {output}")
    elif df.empty:
        click.echo("No ORFs found")
    else:
        click.echo(df.to_string(index=False))


@cli.command()
@click.argument('sequence')
@click.argument('pattern')
@click.option('--type', 'seq_type', type=click.Choice(['dna', 'rna', 'protein']), default='dna',
              help='Sequence type; protein patterns match literally (default: dna)')
@click.option('--output', '-o', type=click.Path(),
              help='Write matches to this TSV instead of stdout')
def motif(sequence, pattern, seq_type, output):
    """
    Find IUPAC PATTERN in SEQUENCE (a sequence or FASTA path).

    \b
    Example:
      seqedit motif ATCGATCG AWCG
    """
    from .analysis.motif import find_motif
    from .core.models import SequenceType
    from .io.output import motifs_to_dataframe, write_table_tsv

    _setup_logging('INFO')
    seq = _load_sequence(sequence)

    df = motifs_to_dataframe(find_motif(seq, pattern, SequenceType(seq_type)))
    if output:
        write_table_tsv(df, Path(output))
        click.echo(f"Wrote {len(df)} matches to {output}")
    elif df.empty:
        click.echo("No matches")
    else:
        click.echo(df.to_string(index=False))


@cli.command()
@click.argument('sequence')
def detect(sequence):
    """Report the detected type of SEQUENCE and any invalid characters."""
    from .analysis.gc import (
        at_content,
        gc_content,
        melting_temperature,
        molecular_weight,
        protein_molecular_weight,
    )
    from .core.alphabet import clean_sequence, detect_sequence_type
    from .core.models import SequenceType

    seq_type = detect_sequence_type(sequence)
    click.echo(f"Type: {seq_type}")
    if seq_type in {t.value for t in SequenceType}:
        result = clean_sequence(sequence, SequenceType(seq_type))
        click.echo(f"Length: {len(result.cleaned)}")
        if not result.is_clean:
            click.echo(
                f"Invalid characters ({result.invalid_count}): {''.join(result.invalid_chars)}"
            )
        if SequenceType(seq_type).is_nucleotide:
            click.echo(f"GC: {gc_content(result.cleaned):.4f}  AT: {at_content(result.cleaned):.4f}")
            click.echo(f"MW: {molecular_weight(result.cleaned):.2f} Da")
            tm = melting_temperature(result.cleaned)
            if tm is not None:
                click.echo(f"Tm: {tm:.1f} C")
        else:
            click.echo(f"MW: {protein_molecular_weight(result.cleaned):.2f} Da")


@cli.command()
@click.argument('sequence')
@click.option('--keys', '-k', type=str, required=True,
              help='Edit script: residues and {Named} keys, e.g. "G{Backspace}{Undo}"')
@click.option('--position', '-p', type=int, default=0,
              help='Cursor position to click before replaying keys (default: 0)')
@click.option('--insert/--substitute', default=False,
              help='Start in insert mode (default: substitute)')
@click.option('--type', 'seq_type', type=click.Choice(['dna', 'rna', 'protein']), default=None,
              help='Sequence type (default: detected)')
@click.option('--changelog', type=click.Path(),
              help='Write the scar ledger as a markdown changelog')
@click.option('--config', '-c', type=click.Path(exists=True),
              help='Editor configuration YAML')
def edit(sequence, keys, position, insert, seq_type, changelog, config):
    """
    Replay an edit script against SEQUENCE and print the result.

    \b
    Example:
      seqedit edit ATGAAATAG -p 3 --keys "G{Insert}CC{Backspace}"
    """
    from .core.alphabet import detect_sequence_type
    from .core.models import SequenceType
    from .core.registry import SessionRegistry
    from .core.session import EditStatus
    from .io.output import generate_changelog_report, scars_to_dataframe

    cfg = _load_config(config)
    _setup_logging(cfg.log_level)
    seq = _load_sequence(sequence)

    seq_type = seq_type or detect_sequence_type(seq)
    if seq_type not in {t.value for t in SequenceType}:
        click.echo(f"Error: cannot edit a sequence of type '{seq_type}'", err=True)
        sys.exit(1)

    registry = SessionRegistry(max_history=cfg.max_history)
    try:
        session = registry.open_block(seq, sequence_type=SequenceType(seq_type), name='cli')
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    block_id = session.block_id
    registry.apply_click(block_id, position)
    if insert:
        registry.toggle_insert_mode(block_id)

    view = registry.view(block_id)
    for key in parse_key_script(keys):
        if key == 'Undo':
            view = registry.undo(block_id)
        elif key == 'Redo':
            view = registry.redo(block_id)
        else:
            view = registry.apply_key(block_id, key)
        if view.status is not EditStatus.APPLIED:
            click.echo(f"{key}: {view.status.value} ({view.message})", err=True)

    click.echo(f"Sequence: {view.raw}")
    click.echo(f"Cursor: {view.cursor_position}")
    click.echo(f"Scars: {len(view.scars)}")
    if view.scars:
        click.echo(scars_to_dataframe(view.scars)[['position', 'type', 'description']]
                   .to_string(index=False))
    if changelog:
        generate_changelog_report(view.scars, Path(changelog))


if __name__ == '__main__':
    cli()
