"""Command line interface.

Examples::

	moodmidi generate -n "C4:1:80,E4:0.5:100@1,G4:0.5:100@1.5" -i piano -o chord.mid
	moodmidi generate --json -o song.mid < song.json
	moodmidi preset -m jazz -d 8 --seed 42 -o intro.wav
	moodmidi render -i intro.mid -o intro.wav
	moodmidi moods
	moodmidi instruments
	moodmidi info intro.mid
"""

import argparse
import json
import logging
import pathlib
import sys
import typing

import yaml

import moodmidi
import moodmidi.config
import moodmidi.constants.gm_instruments
import moodmidi.errors
import moodmidi.keys
import moodmidi.midi_writer
import moodmidi.mood
import moodmidi.note
import moodmidi.pitch
import moodmidi.preset
import moodmidi.render
import moodmidi.sequence


logger = logging.getLogger(__name__)


def _midi_path_for (output: pathlib.Path) -> pathlib.Path:

	"""
	A ``.wav`` output is rendered from a ``.mid`` written next to it.
	"""

	if output.suffix.lower() == ".wav":
		return output.with_suffix(".mid")

	return output


def _finish (output: pathlib.Path, midi_path: pathlib.Path, config: moodmidi.config.AppConfig, soundfont: typing.Optional[str]) -> None:

	if midi_path != output:
		moodmidi.render.render_wav(midi_path, output, config.render, soundfont)
		print(f"Wrote {midi_path} and {output}")
	else:
		print(f"Wrote {output}")


def _log_sequences (sequences: typing.Sequence[moodmidi.sequence.NoteSequence]) -> None:

	for sequence in sequences:
		logger.info(
			f"Track: {moodmidi.sequence.instrument_name(sequence.instrument)} (program {sequence.instrument}), "
			f"channel {sequence.channel}, {sequence.tempo} BPM, {len(sequence.notes)} notes"
		)

		for note in sequence.notes:
			logger.debug(f"  {moodmidi.pitch.pitch_name(note.pitch)} @ {note.start_time} for {note.duration} vel {note.velocity}")


def cmd_generate (args: argparse.Namespace, config: moodmidi.config.AppConfig) -> int:

	if args.json:
		data = json.load(sys.stdin)
		sequences = moodmidi.sequence.sequences_from_dict(data)

	elif args.notes:
		notes = moodmidi.note.parse_note_tokens(args.notes)
		sequences = [moodmidi.sequence.NoteSequence(
			notes = tuple(notes),
			instrument = moodmidi.sequence.instrument_or_piano(args.instrument),
			tempo = args.tempo
		)]

	else:
		logger.error("ERROR: Provide --notes or --json")
		return 1

	if args.verbose:
		_log_sequences(sequences)

	output = pathlib.Path(args.output)
	midi_path = _midi_path_for(output)

	moodmidi.midi_writer.write_midi(sequences, midi_path)
	_finish(output, midi_path, config, args.soundfont)

	return 0


def cmd_preset (args: argparse.Namespace, config: moodmidi.config.AppConfig) -> int:

	defaults = config.preset

	request = moodmidi.preset.PresetRequest(
		mood = args.mood,
		duration_seconds = args.duration if args.duration is not None else defaults.duration,
		key = args.key,
		intensity = args.intensity if args.intensity is not None else defaults.intensity,
		tempo = args.tempo if args.tempo is not None else defaults.tempo,
		seed = args.seed if args.seed is not None else defaults.seed
	)

	result = moodmidi.preset.generate_preset(request)

	if args.verbose:
		logger.info(f"Mood: {result.mood.value}, key: {result.key.name}, tempo: {result.tempo} BPM, seed: {result.seed}")

		for summary in result.layers:
			logger.info(f"  {summary.name}: {summary.instrument_name} (program {summary.instrument}), channel {summary.channel}, {summary.note_count} notes")

	output = pathlib.Path(args.output)
	midi_path = _midi_path_for(output)

	result.write(midi_path)
	_finish(output, midi_path, config, args.soundfont)

	print(f"Seed: {result.seed}")

	return 0


def cmd_render (args: argparse.Namespace, config: moodmidi.config.AppConfig) -> int:

	moodmidi.render.render_wav(args.input, args.output, config.render, args.soundfont)
	print(f"Wrote {args.output}")

	return 0


def cmd_instruments (args: argparse.Namespace, config: moodmidi.config.AppConfig) -> int:

	print("General MIDI instruments (name: program):")

	for name, program in moodmidi.constants.gm_instruments.GM_INSTRUMENT_MAP.items():
		label = "percussion channel" if program == moodmidi.constants.gm_instruments.PERCUSSION else str(program)
		print(f"  {name:<20} {label}")

	print("Any program number 0-127 is also accepted.")

	return 0


def cmd_moods (args: argparse.Namespace, config: moodmidi.config.AppConfig) -> int:

	print("Mood presets:")

	for mood in moodmidi.mood.Mood:
		aliases = [alias for alias, target in moodmidi.mood.MOOD_ALIASES.items() if target is mood and alias != mood.value]
		print(f"  {mood.value:<10} {mood.description} (default key {mood.default_key.name}; also: {', '.join(aliases)})")

	print(f"Keys: {', '.join(moodmidi.keys.available_keys())}")

	return 0


def cmd_info (args: argparse.Namespace, config: moodmidi.config.AppConfig) -> int:

	info = moodmidi.midi_writer.describe_midi(args.file)

	print(f"File: {args.file}")
	print(f"Format: {info['type']}")
	print(f"Ticks per beat: {info['ticks_per_beat']}")
	print(f"Length: {info['length_seconds']:.2f} s")
	print(f"Tracks: {len(info['tracks'])}")

	for track in info["tracks"]:
		channels = ", ".join(str(c) for c in track["channels"]) or "-"
		print(f"  Track {track['index']}: {track['events']} events, {track['notes']} notes, channels {channels}")

	return 0


def build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="moodmidi", description="Generate MIDI files from notes or mood presets")
	parser.add_argument("-V", "--version", action="version", version=f"moodmidi {moodmidi.__version__}")
	parser.add_argument("--config", help="YAML config file (default: moodmidi.yaml if present)")

	sub = parser.add_subparsers(dest="command", required=True)

	generate = sub.add_parser("generate", help="Generate MIDI from note tokens or JSON")
	generate.add_argument("-n", "--notes", help=f"Comma-separated {moodmidi.note.TOKEN_FORMAT} tokens")
	generate.add_argument("-j", "--json", action="store_true", help="Read a JSON note document from stdin")
	generate.add_argument("-i", "--instrument", default=moodmidi.sequence.DEFAULT_INSTRUMENT, help="Instrument name or GM program (default: piano)")
	generate.add_argument("-t", "--tempo", type=float, default=moodmidi.sequence.DEFAULT_TEMPO, help="Tempo in BPM (default: 120)")
	generate.add_argument("-o", "--output", required=True, help="Output path (.mid, or .wav to render audio)")
	generate.add_argument("--soundfont", help="SoundFont for .wav output")
	generate.add_argument("-v", "--verbose", action="store_true", help="Log parsed tracks and notes")
	generate.set_defaults(handler=cmd_generate)

	preset = sub.add_parser("preset", help="Generate a mood preset")
	preset.add_argument("-m", "--mood", required=True, help="suspense, eerie, upbeat, calm, ambient or jazz")
	preset.add_argument("-d", "--duration", type=float, help="Duration in seconds")
	preset.add_argument("-k", "--key", help="Musical key, e.g. Am, C, Bb (default: the mood's key)")
	preset.add_argument("--intensity", type=int, help="Intensity 0-100")
	preset.add_argument("-t", "--tempo", type=float, help="Tempo in BPM")
	preset.add_argument("-s", "--seed", type=int, help="Seed for reproducible output (0 for a random seed)")
	preset.add_argument("-o", "--output", required=True, help="Output path (.mid, or .wav to render audio)")
	preset.add_argument("--soundfont", help="SoundFont for .wav output")
	preset.add_argument("-v", "--verbose", action="store_true", help="Log layers, instruments and note counts")
	preset.set_defaults(handler=cmd_preset)

	render = sub.add_parser("render", help="Render a MIDI file to WAV with FluidSynth")
	render.add_argument("-i", "--input", required=True, help="MIDI file")
	render.add_argument("-o", "--output", required=True, help="WAV file")
	render.add_argument("--soundfont", help="SoundFont file")
	render.set_defaults(handler=cmd_render)

	instruments = sub.add_parser("instruments", help="List instrument names")
	instruments.set_defaults(handler=cmd_instruments)

	moods = sub.add_parser("moods", help="List mood presets")
	moods.set_defaults(handler=cmd_moods)

	info = sub.add_parser("info", help="Summarise a MIDI file")
	info.add_argument("file", help="MIDI file")
	info.set_defaults(handler=cmd_info)

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Entry point for ``moodmidi`` and ``python -m moodmidi``. Returns the process exit status.
	"""

	parser = build_parser()
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO)

	try:
		# The default file is read only when present, so a bare run logs no warning.
		if args.config:
			config = moodmidi.config.load_config(args.config)
		elif pathlib.Path(moodmidi.config.DEFAULT_CONFIG_PATH).exists():
			config = moodmidi.config.load_config(moodmidi.config.DEFAULT_CONFIG_PATH)
		else:
			config = moodmidi.config.AppConfig()

		return args.handler(args, config)

	# MoodMidiError is a ValueError, so this also covers malformed config sections.
	except (ValueError, yaml.YAMLError, moodmidi.render.RenderError, OSError) as exc:
		logger.error(f"ERROR: {exc}")
		return 1


if __name__ == "__main__":
	sys.exit(main())
