"""chordwheel CLI entry point."""

import logging
import sys

import click

from chordwheel import __version__
from chordwheel.accidentals import AccidentalMode
from chordwheel.chord import Chord
from chordwheel.chroma import NOTE_NAMES, chord_chroma, closest_chord, common_chords, notes_chroma
from chordwheel.errors import ChordError
from chordwheel.midi_exporter import MidiExporter
from chordwheel.notes import Note, circle_of_fifths
from chordwheel.resolver import parse_chord
from chordwheel.voicing_strategy import BassRootVoicer, ClosedVoicer, VoicingStrategy

MODE_NAMES = [mode.value for mode in AccidentalMode]


def _get_voicer(bass: bool) -> VoicingStrategy:
    """Return the VoicingStrategy matching the --bass flag."""
    if bass:
        return BassRootVoicer()
    return ClosedVoicer()


def _parse_or_exit(symbol: str) -> Chord:
    try:
        return parse_chord(symbol)
    except ChordError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)


def _mode_option(func):
    return click.option(
        "--mode",
        type=click.Choice(MODE_NAMES, case_sensitive=False),
        default=AccidentalMode.ALLOW_ENHARMONICS.value,
        show_default=True,
        help=(
            "Spelling policy. basic: no double accidentals and no B#/E#/Cb/Fb. "
            "enharmonics: allows B#/E#/Cb/Fb. doubles: allows double sharps/flats."
        ),
    )(func)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordwheel")
@click.option("--verbose", "-v", is_flag=True, help="Log parsing steps to stderr.")
def main(verbose: bool) -> None:
    """chordwheel: chord symbols to correctly spelt notes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


# ── parse subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("symbol")
@_mode_option
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Also spell removed, suspended and out-of-range degrees.",
)
def parse(symbol: str, mode: str, show_all: bool) -> None:
    """
    Parse a chord symbol and print its degrees and notes.

    \b
    Examples:
      chordwheel parse Cm7b5
      chordwheel parse "Cdim9sus4" --all
      chordwheel parse F#maj#11 --mode doubles
    """
    chord = _parse_or_exit(symbol)
    accidental_mode = AccidentalMode(mode.lower())

    click.echo(chord.describe())
    pairs = chord.all_notes(accidental_mode) if show_all else chord.notes(accidental_mode)
    spelled = [
        f"{degree}={note}" if degree.included else f"({degree}={note})"
        for degree, note in pairs
    ]
    click.echo(f"  Notes   : {'  '.join(spelled)}")


# ── circle subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("note")
@_mode_option
def circle(note: str, mode: str) -> None:
    """
    Print the circle of fifths spelt from NOTE, clockwise.

    \b
    Examples:
      chordwheel circle C
      chordwheel circle F# --mode basic
    """
    try:
        start = Note.from_name(note)
    except ChordError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    notes = circle_of_fifths(start, AccidentalMode(mode.lower()))
    click.echo(" ".join(str(n) for n in notes))


# ── midi subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("symbols", nargs=-1, required=True)
@click.option(
    "--output",
    "-o",
    default="progression.mid",
    show_default=True,
    metavar="PATH",
    help="Destination MIDI file path.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=MidiExporter.DEFAULT_TEMPO,
    show_default=True,
    help="Playback tempo in BPM.",
)
@click.option(
    "--beats",
    type=click.FloatRange(min=0.25),
    default=4.0,
    show_default=True,
    help="Length of each chord in beats.",
)
@click.option("--bass", is_flag=True, help="Add the root one octave lower in a bass track.")
@_mode_option
def midi(
    symbols: tuple[str, ...],
    output: str,
    tempo: int,
    beats: float,
    bass: bool,
    mode: str,
) -> None:
    """
    Voice a chord progression and save it as MIDI.

    \b
    Examples:
      chordwheel midi Dm7 G7 Cmaj7
      chordwheel midi Cm7b5 F7alt Bbm6 --bass --tempo 96 -o ii-V-i.mid
    """
    chords = [_parse_or_exit(symbol) for symbol in symbols]
    voicer = _get_voicer(bass)
    voiced = voicer.voice_progression(chords, beats, AccidentalMode(mode.lower()))

    for vc in voiced:
        click.echo(f"  {vc.start_beat:6.1f}  {vc.chord.symbol:<14}  {vc.right_hand_notes}")

    exporter = MidiExporter(tempo=tempo)
    try:
        exporter.export(voiced, output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write MIDI file: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Wrote {len(voiced)} chord(s) to '{output}'.")


# ── chroma subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("symbol")
def chroma(symbol: str) -> None:
    """
    Print the 12-bin pitch-class profile of a chord.

    \b
    Example:
      chordwheel chroma Cm7b5
    """
    chord = _parse_or_exit(symbol)
    vector = chord_chroma(chord)

    click.echo(chord.symbol)
    click.echo("  " + " ".join(f"{name:<2}" for name in NOTE_NAMES).rstrip())
    click.echo("  " + " ".join(f"{int(value):<2}" for value in vector).rstrip())


# ── identify subcommand ────────────────────────────────────────────────────────

@main.command()
@click.argument("notes", nargs=-1, required=True)
@click.option(
    "--candidate",
    "-c",
    "candidates",
    multiple=True,
    metavar="SYMBOL",
    help="Chord to compare against (repeatable). Defaults to common chords on every root.",
)
def identify(notes: tuple[str, ...], candidates: tuple[str, ...]) -> None:
    """
    Name the chord whose pitch classes best match NOTES.

    \b
    Examples:
      chordwheel identify G B D F
      chordwheel identify C Eb G Bb -c Cm7 -c Ebmaj7 -c Eb6
    """
    try:
        target = notes_chroma([Note.from_name(name) for name in notes])
    except ChordError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    chords = [_parse_or_exit(symbol) for symbol in candidates] if candidates else common_chords()
    best = closest_chord(target, chords)
    if best is None:
        click.echo("  ERROR: No candidate chord has any sounding notes.", err=True)
        sys.exit(1)

    click.echo(f"Closest chord: {best.symbol}")
