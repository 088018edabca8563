"""MidiExporter: Converts VoicedChord events into a two-staff MIDI file."""

from midiutil import MIDIFile

from chordwheel.voicing_strategy import VoicedChord

# In midiutil Format 1 MIDI, track 0 is the conductor/tempo track.
# Note data written to track 0 is ignored by most players and notation apps.
TRACK_CONDUCTOR = 0  # Tempo/time signature/chord names only
TRACK_RH = 1         # Chord voicing, top staff (treble clef)
TRACK_LH = 2         # Bass, bottom staff (bass clef)

# General MIDI channel assignments
CHANNEL_RH = 0
CHANNEL_LH = 1


class MidiExporter:
    """
    Writes a chord progression as a Standard MIDI File (format 1).

    Track layout
    ------------
    Track 0, conductor track: tempo, 4/4 time signature and one text
    event per chord carrying its canonical symbol, so the progression can
    be read back in any MIDI editor's event list.

    Track 1, "Chords": the right-hand voicing of every chord.

    Track 2, "Bass": left-hand notes; empty unless the voicer adds a bass.

    Timing
    ------
    VoicedChord start/duration are already in beats and are written as is.
    """

    DEFAULT_TEMPO = 80     # BPM
    DEFAULT_VELOCITY = 80  # MIDI velocity for chord notes (0-127)
    BASS_VELOCITY = 68     # Slightly softer bass notes

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
    ) -> None:
        """
        Args:
            tempo:    Playback tempo in beats per minute.
            velocity: MIDI note-on velocity for chord notes.
        """
        self.tempo = tempo
        self.velocity = velocity

    def build(self, voiced_chords: list[VoicedChord]) -> MIDIFile:
        """Assemble the in-memory MIDI file without writing it."""
        midi = MIDIFile(numTracks=3, removeDuplicates=False, deinterleave=False)

        midi.addTempo(TRACK_CONDUCTOR, 0, self.tempo)
        midi.addTimeSignature(TRACK_CONDUCTOR, 0, 4, 2, 24)
        midi.addTrackName(TRACK_RH, 0, "Chords")
        midi.addTrackName(TRACK_LH, 0, "Bass")

        for vc in voiced_chords:
            midi.addText(TRACK_CONDUCTOR, vc.start_beat, vc.chord.symbol)

            for pitch in vc.left_hand_notes:
                midi.addNote(
                    track=TRACK_LH,
                    channel=CHANNEL_LH,
                    pitch=pitch,
                    time=vc.start_beat,
                    duration=vc.duration_beats,
                    volume=self.BASS_VELOCITY,
                )

            for pitch in vc.right_hand_notes:
                midi.addNote(
                    track=TRACK_RH,
                    channel=CHANNEL_RH,
                    pitch=pitch,
                    time=vc.start_beat,
                    duration=vc.duration_beats,
                    volume=self.velocity,
                )

        return midi

    def export(self, voiced_chords: list[VoicedChord], output_path: str) -> None:
        """
        Render voiced chords to a Standard MIDI File.

        Args:
            voiced_chords: Ordered list of VoicedChord objects to write.
            output_path:   Destination file path (e.g. "progression.mid").

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = self.build(voiced_chords)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
