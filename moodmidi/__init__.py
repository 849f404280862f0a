"""
moodmidi - deterministic mood music and note sequences as Standard MIDI Files.

moodmidi turns either explicit notes or a named mood into a multi-track MIDI
file. It is aimed at short stingers such as video intros and outros, where
the same request must always give the same file.

What it does:

- **Explicit notes.** ``"C4:1:80,E4:0.5:100@1"`` tokens or a JSON note
  document become one or more instrument tracks.
- **Mood presets.** Six composers (suspense, eerie, upbeat, calm, ambient,
  jazz) each build a fixed pipeline of layers from a key, a duration and an
  intensity. Intensity adds layers and raises accents.
- **Reproducible.** Every random choice comes from one seeded stream owned
  by the run. The same seed and inputs give byte-identical MIDI.
- **Standard output.** Format 1 files at 480 ticks per quarter note, one
  track per layer, written in one go only after the whole file has been
  encoded.
- **Optional audio.** A thin FluidSynth adapter renders ``.wav`` files.

Minimal example:

	```python
	import moodmidi

	result = moodmidi.generate_preset(moodmidi.PresetRequest(mood="jazz", duration_seconds=8, seed=42))
	result.write("intro.mid")

	notes = moodmidi.parse_note_tokens("C4:1:80,E4:1:80@1,G4:2:90@2")
	moodmidi.write_midi([moodmidi.NoteSequence(notes=tuple(notes), tempo=100)], "arpeggio.mid")
	```

Package-level exports: ``Note``, ``NoteSequence``, ``Key``, ``Mood``,
``PresetRequest``, ``PresetResult``, ``generate_preset``,
``parse_note_tokens``, ``parse_pitch``, ``parse_key``, ``encode``,
``write_midi``.
"""

__version__ = "0.1.0"

import moodmidi.keys
import moodmidi.midi_writer
import moodmidi.mood
import moodmidi.note
import moodmidi.pitch
import moodmidi.preset
import moodmidi.sequence


Note = moodmidi.note.Note
NoteSequence = moodmidi.sequence.NoteSequence
Key = moodmidi.keys.Key
Mood = moodmidi.mood.Mood
PresetRequest = moodmidi.preset.PresetRequest
PresetResult = moodmidi.preset.PresetResult
generate_preset = moodmidi.preset.generate_preset
parse_note_tokens = moodmidi.note.parse_note_tokens
parse_pitch = moodmidi.pitch.parse_pitch
parse_key = moodmidi.keys.parse_key
encode = moodmidi.midi_writer.encode
write_midi = moodmidi.midi_writer.write_midi
