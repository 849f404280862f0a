"""Multi-track Standard MIDI File encoding.

Sequences become a format 1 file at 480 ticks per quarter note: a tempo track
carrying the tempo and a 4/4 time signature, followed by one track per
sequence. Serialisation (chunk headers, variable-length delta times, running
status) is handled by ``mido``.

Encoding is all-or-nothing. ``build_document`` assembles every track in
memory, ``MidiDocument.to_bytes`` serialises the result, and ``write_midi``
writes it out in a single call only after both have succeeded.
"""

import dataclasses
import io
import logging
import os
import typing

import mido

import moodmidi.constants
import moodmidi.errors
import moodmidi.pitch
import moodmidi.sequence


logger = logging.getLogger(__name__)


MIDI_FORMAT = 1

# Sort rank for events that share a tick.
_RANK_PROGRAM = 0
_RANK_NOTE_OFF = 1
_RANK_NOTE_ON = 2


@dataclasses.dataclass(frozen=True)
class TrackEvent:

	"""
	A message positioned at an absolute tick. The message's own ``time`` is ignored until serialisation.
	"""

	tick: int
	message: typing.Union[mido.Message, mido.MetaMessage]


@dataclasses.dataclass(frozen=True)
class MidiDocument:

	"""A fully assembled file, ready to serialise.

	``tracks[0]`` is the tempo track; the remaining tracks follow the input
	sequences in order. Every track ends with an ``end_of_track`` event.
	"""

	tracks: typing.Tuple[typing.Tuple[TrackEvent, ...], ...]
	ticks_per_beat: int = moodmidi.constants.TICKS_PER_BEAT
	format: int = MIDI_FORMAT


	@property
	def track_count (self) -> int:

		return len(self.tracks)


	def to_midi_file (self) -> mido.MidiFile:

		"""
		Convert absolute ticks to delta times and return an equivalent ``mido.MidiFile``.
		"""

		midi_file = mido.MidiFile(type=self.format, ticks_per_beat=self.ticks_per_beat)

		for events in self.tracks:
			track = mido.MidiTrack()
			last_tick = 0

			for event in events:
				track.append(event.message.copy(time=event.tick - last_tick))
				last_tick = event.tick

			midi_file.tracks.append(track)

		return midi_file


	def to_bytes (self) -> bytes:

		buffer = io.BytesIO()
		self.to_midi_file().save(file=buffer)

		return buffer.getvalue()


def _check_tick (tick: int, field: str) -> int:

	if tick > moodmidi.constants.MAX_TICK:
		raise moodmidi.errors.EncodingOverflow(
			f"Tick {tick} exceeds the largest delta time a MIDI file can hold",
			field = field,
			value = tick,
			expected = f"<= {moodmidi.constants.MAX_TICK}"
		)

	return tick


def _tempo_track (tempo: float) -> typing.Tuple[TrackEvent, ...]:

	# Truncated, not rounded: 90 BPM is 666666 microseconds per beat.
	microseconds = int(moodmidi.constants.MICROSECONDS_PER_MINUTE / tempo)

	return (
		TrackEvent(0, mido.MetaMessage("set_tempo", tempo=microseconds)),
		TrackEvent(0, mido.MetaMessage(
			"time_signature",
			numerator = moodmidi.constants.TIME_SIGNATURE_NUMERATOR,
			denominator = moodmidi.constants.TIME_SIGNATURE_DENOMINATOR,
			clocks_per_click = moodmidi.constants.TIME_SIGNATURE_CLOCKS_PER_CLICK,
			notated_32nd_notes_per_beat = moodmidi.constants.TIME_SIGNATURE_32NDS_PER_BEAT
		)),
		TrackEvent(0, mido.MetaMessage("end_of_track")),
	)


def _sequence_track (sequence: moodmidi.sequence.NoteSequence, ticks_per_beat: int) -> typing.Tuple[TrackEvent, ...]:

	"""Build the events of one instrument track.

	Note-offs sort ahead of note-ons at the same tick, so a note that ends
	exactly where the next one on the same pitch begins is released first.
	Other ties keep their input order.
	"""

	if sequence.is_percussion:
		channel = moodmidi.constants.PERCUSSION_CHANNEL
		program = 0
	else:
		channel = sequence.channel
		program = sequence.instrument

	ranked: typing.List[typing.Tuple[int, int, mido.Message]] = [
		(0, _RANK_PROGRAM, mido.Message("program_change", channel=channel, program=program))
	]

	for note in sequence.notes:
		start = _check_tick(moodmidi.pitch.beats_to_ticks(note.start_time, ticks_per_beat), "start_time")
		end = _check_tick(moodmidi.pitch.beats_to_ticks(note.end_time, ticks_per_beat), "end_time")

		# A positive duration never collapses to a zero-length note.
		if end <= start:
			end = _check_tick(start + 1, "end_time")

		ranked.append((start, _RANK_NOTE_ON, mido.Message("note_on", channel=channel, note=note.pitch, velocity=note.velocity)))
		ranked.append((end, _RANK_NOTE_OFF, mido.Message("note_off", channel=channel, note=note.pitch, velocity=0)))

	ranked.sort(key=lambda item: (item[0], item[1]))

	events = [TrackEvent(tick, message) for tick, _, message in ranked]
	last_tick = events[-1].tick

	events.append(TrackEvent(last_tick, mido.MetaMessage("end_of_track")))

	return tuple(events)


def build_document (sequences: typing.Sequence[moodmidi.sequence.NoteSequence], ticks_per_beat: int = moodmidi.constants.TICKS_PER_BEAT) -> MidiDocument:

	"""Assemble sequences into a ``MidiDocument``.

	The tempo track takes the tempo of the first sequence. Sequences are not
	validated here; use ``validate_sequences`` (or ``write_midi``) for that.

	Raises:
		EmptyTrackSet: No sequences were supplied.
		EncodingOverflow: A note position exceeds the largest representable tick.
	"""

	if not sequences:
		raise moodmidi.errors.EmptyTrackSet("No sequences to encode", field="sequences", value=0, expected="at least one sequence")

	tracks = [_tempo_track(sequences[0].tempo)]

	for sequence in sequences:
		tracks.append(_sequence_track(sequence, ticks_per_beat))

	return MidiDocument(tracks=tuple(tracks), ticks_per_beat=ticks_per_beat)


def encode (sequences: typing.Sequence[moodmidi.sequence.NoteSequence]) -> bytes:

	"""
	Return the Standard MIDI File bytes for a set of sequences.
	"""

	return build_document(sequences).to_bytes()


def write_midi (sequences: typing.Sequence[moodmidi.sequence.NoteSequence], path: typing.Union[str, os.PathLike]) -> int:

	"""Validate, encode and write sequences to ``path``.

	Nothing is written unless validation and encoding both succeed.

	Returns:
		The number of bytes written.
	"""

	moodmidi.sequence.validate_sequences(sequences)

	data = encode(sequences)

	with open(path, "wb") as f:
		f.write(data)

	logger.debug(f"Wrote {len(data)} bytes ({len(sequences)} track(s)) to {path}")

	return len(data)


def describe_midi (path: typing.Union[str, os.PathLike]) -> typing.Dict[str, typing.Any]:

	"""Read a MIDI file back and summarise it.

	Returns:
		A dict with ``type``, ``ticks_per_beat``, ``length_seconds`` and a
		``tracks`` list of ``{"index", "events", "notes", "channels"}``.
	"""

	midi_file = mido.MidiFile(path)
	tracks = []

	for index, track in enumerate(midi_file.tracks):
		note_ons = [msg for msg in track if msg.type == "note_on"]

		tracks.append({
			"index": index,
			"events": len(track),
			"notes": len(note_ons),
			"channels": sorted({msg.channel for msg in track if not msg.is_meta and hasattr(msg, "channel")}),
		})

	return {
		"type": midi_file.type,
		"ticks_per_beat": midi_file.ticks_per_beat,
		"length_seconds": midi_file.length,
		"tracks": tracks,
	}
