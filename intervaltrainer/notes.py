from typing import List

from .models import Pitch

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

A4_MIDI = 69
A4_FREQ = 440.0

MIN_MIDI = 48
MAX_MIDI = 83


def pitch_to_frequency(m: int) -> float:
	return float(A4_FREQ * (2.0 ** ((m - A4_MIDI) / 12.0)))


def pitch_to_display_name(m: int) -> str:
	# floor division keeps negative pitch numbers on the right octave
	return NOTE_NAMES[m % 12] + str(m // 12 - 1)


def pitch_to_sample_key(m: int) -> str:
	"""Display name with '#' spelled as 's', e.g. 'Cs4', for sample lookups."""
	return pitch_to_display_name(m).replace("#", "s")


def is_in_range(m: int, min_midi: int = MIN_MIDI, max_midi: int = MAX_MIDI) -> bool:
	return min_midi <= m <= max_midi


def make_pitch(m: int) -> Pitch:
	return Pitch(pitch_number=m, display_name=pitch_to_display_name(m), sample_key=pitch_to_sample_key(m))


def generate_pitch_range(min_midi: int = MIN_MIDI, max_midi: int = MAX_MIDI) -> List[Pitch]:
	return [make_pitch(m) for m in range(min_midi, max_midi + 1)]


PLAYABLE_PITCHES = generate_pitch_range()


def playable_range() -> List[Pitch]:
	"""All playable pitches in ascending order."""
	return list(PLAYABLE_PITCHES)
