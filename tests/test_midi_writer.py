import io
import struct
import typing

import mido
import pytest

import moodmidi.constants.gm_instruments
import moodmidi.errors
import moodmidi.midi_writer
import moodmidi.note
import moodmidi.sequence


Chunks = typing.List[typing.Tuple[bytes, int, bytes]]


def _read (data: bytes) -> mido.MidiFile:

	return mido.MidiFile(file=io.BytesIO(data))


def _absolute (track: mido.MidiTrack) -> typing.List[typing.Tuple[int, mido.Message]]:

	"""Pair each message with its absolute tick."""

	tick = 0
	result = []

	for msg in track:
		tick += msg.time
		result.append((tick, msg))

	return result


def test_header_and_chunk_lengths (c_major_sequence: moodmidi.sequence.NoteSequence, split_chunks: typing.Callable[[bytes], Chunks]) -> None:

	"""Format 1, one tempo track plus one per sequence, 480 ticks per beat, and honest chunk lengths."""

	data = moodmidi.midi_writer.encode([c_major_sequence, c_major_sequence.with_channel(1)])
	chunks = split_chunks(data)

	assert data[:4] == b"MThd"
	assert chunks[0][1] == 6
	assert struct.unpack(">HHH", chunks[0][2]) == (1, 3, 480)
	assert [chunk_id for chunk_id, _, _ in chunks[1:]] == [b"MTrk"] * 3


def test_tempo_track (c_major_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""The first track carries the tempo and a 4/4 time signature, and nothing else."""

	midi_file = _read(moodmidi.midi_writer.encode([c_major_sequence]))
	tempo_track = midi_file.tracks[0]

	assert [msg.type for msg in tempo_track] == ["set_tempo", "time_signature", "end_of_track"]
	assert tempo_track[0].tempo == 500000
	assert (tempo_track[1].numerator, tempo_track[1].denominator) == (4, 4)


def test_note_events (c_major_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""Program change first, then note-ons and note-offs at the expected ticks."""

	midi_file = _read(moodmidi.midi_writer.encode([c_major_sequence]))
	events = _absolute(midi_file.tracks[1])

	assert events[0][1].type == "program_change"
	assert events[0][1].program == 0

	ons = [(tick, msg.note) for tick, msg in events if msg.type == "note_on" and msg.velocity > 0]
	offs = [(tick, msg.note) for tick, msg in events if msg.type == "note_off"]

	assert ons == [(0, 60), (480, 64), (960, 67)]
	assert offs == [(480, 60), (960, 64), (1920, 67)]
	assert events[-1][0] == 1920
	assert events[-1][1].type == "end_of_track"


def test_note_off_precedes_note_on_at_same_tick () -> None:

	"""Back-to-back notes on one pitch release before they re-strike."""

	notes = (
		moodmidi.note.Note(pitch=60, duration=1.0, velocity=80, start_time=0.0),
		moodmidi.note.Note(pitch=60, duration=1.0, velocity=80, start_time=1.0),
	)
	sequence = moodmidi.sequence.NoteSequence(notes=notes)

	events = _absolute(_read(moodmidi.midi_writer.encode([sequence])).tracks[1])
	at_480 = [msg.type for tick, msg in events if tick == 480]

	assert at_480 == ["note_off", "note_on"]


def test_delta_times_never_negative (c_major_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""Overlapping and out-of-order notes still produce a monotonic track."""

	notes = (
		moodmidi.note.Note(pitch=48, duration=8.0, velocity=50, start_time=0.0),
		moodmidi.note.Note(pitch=72, duration=0.5, velocity=90, start_time=3.0),
		moodmidi.note.Note(pitch=67, duration=2.5, velocity=70, start_time=1.0),
	)
	sequence = moodmidi.sequence.NoteSequence(notes=notes)

	for track in _read(moodmidi.midi_writer.encode([sequence])).tracks:
		assert all(msg.time >= 0 for msg in track)


def test_tiny_note_is_not_zero_length () -> None:

	"""A duration that rounds to zero ticks still gets one tick."""

	sequence = moodmidi.sequence.NoteSequence(notes=(moodmidi.note.Note(pitch=60, duration=0.0001, velocity=80),))

	events = _absolute(_read(moodmidi.midi_writer.encode([sequence])).tracks[1])
	ticks = {msg.type: tick for tick, msg in events if msg.type in ("note_on", "note_off")}

	assert ticks == {"note_on": 0, "note_off": 1}


def test_percussion_goes_to_channel_nine (drum_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""The percussion marker forces channel 9 with program 0, whatever channel was set."""

	events = _absolute(_read(moodmidi.midi_writer.encode([drum_sequence])).tracks[1])
	channel_messages = [msg for _, msg in events if not msg.is_meta]

	assert {msg.channel for msg in channel_messages} == {9}
	assert channel_messages[0].type == "program_change"
	assert channel_messages[0].program == 0


def test_channel_and_program_follow_sequence (c_major_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""Melodic tracks use their own channel and instrument."""

	sequence = moodmidi.sequence.NoteSequence(notes=c_major_sequence.notes, instrument=moodmidi.constants.gm_instruments.CELLO, channel=4)
	events = _absolute(_read(moodmidi.midi_writer.encode([sequence])).tracks[1])

	assert events[0][1].program == 42
	assert {msg.channel for _, msg in events if not msg.is_meta} == {4}


def test_tempo_comes_from_first_sequence (c_major_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""A 90 BPM first sequence sets a 90 BPM file."""

	slow = moodmidi.sequence.NoteSequence(notes=c_major_sequence.notes, tempo=90)
	midi_file = _read(moodmidi.midi_writer.encode([slow, c_major_sequence]))

	assert mido.tempo2bpm(midi_file.tracks[0][0].tempo) == pytest.approx(90)


@pytest.mark.parametrize("bpm, microseconds", [(120, 500000), (90, 666666), (70, 857142), (300, 200000)])
def test_tempo_is_truncated (
	c_major_sequence: moodmidi.sequence.NoteSequence,
	split_chunks: typing.Callable[[bytes], Chunks],
	read_vlq: typing.Callable[[bytes, int], typing.Tuple[int, int]],
	bpm: int,
	microseconds: int
) -> None:

	"""The set_tempo payload is 60,000,000 / BPM with the fraction dropped."""

	sequence = moodmidi.sequence.NoteSequence(notes=c_major_sequence.notes, tempo=bpm)
	_, _, body = split_chunks(moodmidi.midi_writer.encode([sequence]))[1]

	delta, position = read_vlq(body, 0)

	assert delta == 0
	assert body[position:position + 3] == b"\xff\x51\x03"
	assert int.from_bytes(body[position + 3:position + 6], "big") == microseconds


def test_raw_tracks_are_well_formed (
	c_major_sequence: moodmidi.sequence.NoteSequence,
	drum_sequence: moodmidi.sequence.NoteSequence,
	split_chunks: typing.Callable[[bytes], Chunks],
	walk_track: typing.Callable[[bytes], typing.List[typing.Tuple[int, int, bytes]]]
) -> None:

	"""Decoded byte by byte, every track ends exactly on end_of_track and matches mido's timing."""

	data = moodmidi.midi_writer.encode([c_major_sequence, drum_sequence])
	midi_file = _read(data)

	for (_, _, body), track in zip(split_chunks(data)[1:], midi_file.tracks):
		events = walk_track(body)

		assert events[-1][1:] == (0xFF, b"\x2f")
		assert [delta for delta, _, _ in events] == [msg.time for msg in track]


def test_empty_track_set () -> None:

	"""Encoding nothing is an error."""

	with pytest.raises(moodmidi.errors.EmptyTrackSet):
		moodmidi.midi_writer.encode([])


def test_encoding_overflow () -> None:

	"""Positions beyond the largest delta time are rejected."""

	far = moodmidi.note.Note(pitch=60, duration=1.0, velocity=80, start_time=600_000.0)

	with pytest.raises(moodmidi.errors.EncodingOverflow) as exc_info:
		moodmidi.midi_writer.encode([moodmidi.sequence.NoteSequence(notes=(far,))])

	assert exc_info.value.field == "start_time"


def test_build_document_structure (c_major_sequence: moodmidi.sequence.NoteSequence, drum_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""Every track ends with end_of_track at its last tick."""

	document = moodmidi.midi_writer.build_document([c_major_sequence, drum_sequence])

	assert document.track_count == 3
	assert document.ticks_per_beat == 480

	for events in document.tracks:
		assert events[-1].message.type == "end_of_track"
		assert events[-1].tick == max(e.tick for e in events)


def test_write_midi (tmp_path: typing.Any, c_major_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""The file holds exactly the encoded bytes and its size is returned."""

	path = tmp_path / "out.mid"
	written = moodmidi.midi_writer.write_midi([c_major_sequence], path)

	assert path.read_bytes() == moodmidi.midi_writer.encode([c_major_sequence])
	assert written == path.stat().st_size


def test_write_midi_writes_nothing_on_failure (tmp_path: typing.Any) -> None:

	"""Invalid input leaves no file behind."""

	path = tmp_path / "bad.mid"
	bad = moodmidi.sequence.NoteSequence(notes=(moodmidi.note.Note(pitch=60, duration=1.0, velocity=80),), tempo=500)

	with pytest.raises(moodmidi.errors.InvalidTempo):
		moodmidi.midi_writer.write_midi([bad], path)

	assert not path.exists()


def test_describe_midi (tmp_path: typing.Any, c_major_sequence: moodmidi.sequence.NoteSequence, drum_sequence: moodmidi.sequence.NoteSequence) -> None:

	"""Reading a file back reports its shape."""

	path = tmp_path / "described.mid"
	moodmidi.midi_writer.write_midi([c_major_sequence, drum_sequence], path)

	info = moodmidi.midi_writer.describe_midi(path)

	assert info["type"] == 1
	assert info["ticks_per_beat"] == 480
	assert info["length_seconds"] == pytest.approx(2.0)
	assert [t["notes"] for t in info["tracks"]] == [0, 3, 4]
	assert [t["channels"] for t in info["tracks"]] == [[], [0], [9]]
