"""VoicingStrategy: Strategy pattern for mapping parsed chords to MIDI note sets."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from chordwheel.accidentals import AccidentalMode
from chordwheel.chord import Chord

# ── MIDI constants ──────────────────────────────────────────────────────────
SEMITONES_PER_OCTAVE = 12
DIATONIC_STEPS = 7
# Semitones above the root of the unaltered simple degrees 1-7
MAJOR_SCALE_SEMITONES = (0, 2, 4, 5, 7, 9, 11)


def pitch_class_to_midi(pitch_class: int, octave: int) -> int:
    """
    Convert a pitch class (0-11) and an octave number to an absolute MIDI note.

    MIDI octave numbering: C-1 = 0, C0 = 12, C1 = 24, ... C4 (Middle C) = 60.

    Args:
        pitch_class: 0=C, 1=C#, 2=D, ..., 11=B.
        octave:      Scientific octave number (e.g. 4 for Middle C octave).

    Returns:
        MIDI note number.
    """
    return (octave + 1) * SEMITONES_PER_OCTAVE + pitch_class


@dataclass
class VoicedChord:
    """
    A parsed chord placed in time with concrete MIDI note assignments.

    Attributes:
        chord:            The chord being voiced.
        start_beat:       Start position in beats.
        duration_beats:   Length in beats.
        right_hand_notes: MIDI note numbers for the chord voicing (treble).
        left_hand_notes:  MIDI note numbers for the bass (empty if none).
    """

    chord: Chord
    start_beat: float
    duration_beats: float
    right_hand_notes: list[int] = field(default_factory=list)
    left_hand_notes: list[int] = field(default_factory=list)


# ── Abstract base ────────────────────────────────────────────────────────────

class VoicingStrategy(ABC):
    """
    Abstract Strategy for assigning MIDI pitches to a parsed chord.

    Concrete subclasses implement ``voice()`` to produce different note
    layouts; ``voice_progression()`` lays a list of chords end to end.
    """

    RH_OCTAVE = 4  # Middle C octave, C4 = MIDI 60

    def _stack_notes(self, chord: Chord, octave: int, accidental_mode: AccidentalMode) -> list[int]:
        """
        Place every sounding degree above the root in ``octave``.

        Simple degrees (1-7) sit within the octave above the root; a 9th,
        11th or 13th lands an octave higher and a 15th two octaves higher.
        The spelt note only fixes the pitch class: the octave follows the
        degree, so a #7 sits above the root (B# = C5) and a b1 below it.
        """
        root_midi = pitch_class_to_midi(chord.root.pitch - 1, octave)
        pitches: set[int] = set()
        for degree, note in chord.notes(accidental_mode):
            semitones = (note.pitch - chord.root.pitch) % SEMITONES_PER_OCTAVE
            octaves_up, step = divmod(degree.numeral - 1, DIATONIC_STEPS)
            drift = semitones - MAJOR_SCALE_SEMITONES[step]
            if drift > SEMITONES_PER_OCTAVE // 2:
                semitones -= SEMITONES_PER_OCTAVE
            elif drift < -SEMITONES_PER_OCTAVE // 2:
                semitones += SEMITONES_PER_OCTAVE
            pitches.add(root_midi + semitones + octaves_up * SEMITONES_PER_OCTAVE)
        return sorted(pitches)

    @abstractmethod
    def voice(
        self,
        chord: Chord,
        start_beat: float = 0.0,
        duration_beats: float = 4.0,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> VoicedChord:
        """
        Map a Chord to a VoicedChord with concrete MIDI note numbers.

        Args:
            chord:           Parsed chord.
            start_beat:      Where the chord starts, in beats.
            duration_beats:  How long it lasts, in beats.
            accidental_mode: Spelling policy forwarded to note construction.

        Returns:
            VoicedChord with right_hand_notes and left_hand_notes populated.
        """

    def voice_progression(
        self,
        chords: list[Chord],
        beats_per_chord: float = 4.0,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> list[VoicedChord]:
        """Voice ``chords`` back to back, ``beats_per_chord`` beats each."""
        return [
            self.voice(chord, index * beats_per_chord, beats_per_chord, accidental_mode)
            for index, chord in enumerate(chords)
        ]


# ── Concrete strategies ──────────────────────────────────────────────────────

class ClosedVoicer(VoicingStrategy):
    """
    Closed voicing: every sounding note stacked upward from the root in the
    Middle C octave, right hand only.

        C      → C4(60), E4(64), G4(67)
        Cm7b5  → C4(60), Eb4(63), Gb4(66), Bb4(70)
        C9sus4 → C4(60), F4(65), G4(67), Bb4(70), D5(74)
    """

    def voice(
        self,
        chord: Chord,
        start_beat: float = 0.0,
        duration_beats: float = 4.0,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> VoicedChord:
        return VoicedChord(
            chord=chord,
            start_beat=start_beat,
            duration_beats=duration_beats,
            right_hand_notes=self._stack_notes(chord, self.RH_OCTAVE, accidental_mode),
            left_hand_notes=[],
        )


class BassRootVoicer(VoicingStrategy):
    """
    Closed voicing in the right hand plus the root one octave lower.

    Left hand (octave 3): C3 = MIDI 48 … B3 = MIDI 59.
    Right hand (octave 4): the same stack as :class:`ClosedVoicer`.
    """

    LH_OCTAVE = 3  # Left hand: C3 = MIDI 48  (one octave below RH root)

    def voice(
        self,
        chord: Chord,
        start_beat: float = 0.0,
        duration_beats: float = 4.0,
        accidental_mode: AccidentalMode = AccidentalMode.ALLOW_ENHARMONICS,
    ) -> VoicedChord:
        return VoicedChord(
            chord=chord,
            start_beat=start_beat,
            duration_beats=duration_beats,
            right_hand_notes=self._stack_notes(chord, self.RH_OCTAVE, accidental_mode),
            left_hand_notes=[pitch_class_to_midi(chord.root.pitch - 1, self.LH_OCTAVE)],
        )
