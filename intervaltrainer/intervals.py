from typing import Dict, List, Mapping

from .errors import UnknownIntervalError, UnknownScaleError
from .models import EnabledIntervalSet, Interval, Pitch, Scale
from .notes import PLAYABLE_PITCHES, is_in_range

SEMITONES = {
	"m2": 1,
	"M2": 2,
	"m3": 3,
	"M3": 4,
	"P4": 5,
	"TT": 6,
	"P5": 7,
	"m6": 8,
	"M6": 9,
	"m7": 10,
	"M7": 11,
	"P8": 12,
}

INTERVAL_NAMES = {
	"m2": "Minor 2nd",
	"M2": "Major 2nd",
	"m3": "Minor 3rd",
	"M3": "Major 3rd",
	"P4": "Perfect 4th",
	"TT": "Tritone",
	"P5": "Perfect 5th",
	"m6": "Minor 6th",
	"M6": "Major 6th",
	"m7": "Minor 7th",
	"M7": "Major 7th",
	"P8": "Octave",
}

INTERVALS: Dict[str, Interval] = {
	key: Interval(name=INTERVAL_NAMES[key], semitones=d, abbrev=key) for key, d in SEMITONES.items()
}

CUSTOM = "custom"

SCALES: Dict[str, Scale] = {
	"major": Scale(name="Major", intervals=["M2", "M3", "P4", "P5", "M6", "M7", "P8"]),
	"natural_minor": Scale(name="Natural Minor", intervals=["M2", "m3", "P4", "P5", "m6", "m7", "P8"]),
	"harmonic_minor": Scale(name="Harmonic Minor", intervals=["M2", "m3", "P4", "P5", "m6", "M7", "P8"]),
	"melodic_minor": Scale(name="Melodic Minor", intervals=["M2", "m3", "P4", "P5", "M6", "M7", "P8"]),
	"dorian": Scale(name="Dorian", intervals=["M2", "m3", "P4", "P5", "M6", "m7", "P8"]),
	"phrygian": Scale(name="Phrygian", intervals=["m2", "m3", "P4", "P5", "m6", "m7", "P8"]),
	"lydian": Scale(name="Lydian", intervals=["M2", "M3", "TT", "P5", "M6", "M7", "P8"]),
	"mixolydian": Scale(name="Mixolydian", intervals=["M2", "M3", "P4", "P5", "M6", "m7", "P8"]),
	CUSTOM: Scale(name="Custom", intervals=[]),
}

# Canonical match order for find_matching_scale
SCALE_KEYS = ["major", "natural_minor", "harmonic_minor", "melodic_minor", "dorian", "phrygian", "lydian", "mixolydian"]

# Semitones from the tonic, tonic and octave included
SCALE_STEPS: Dict[str, List[int]] = {
	key: [0] + [SEMITONES[k] for k in SCALES[key].intervals] for key in SCALE_KEYS
}


def interval_keys() -> List[str]:
	return list(SEMITONES.keys())


def scale_names() -> List[str]:
	return list(SCALE_KEYS)


def get_interval(key: str) -> Interval:
	try:
		return INTERVALS[key]
	except KeyError:
		raise UnknownIntervalError(key) from None


def no_intervals_enabled() -> EnabledIntervalSet:
	return {k: False for k in SEMITONES}


def all_intervals_enabled() -> EnabledIntervalSet:
	return {k: True for k in SEMITONES}


def single_interval(key: str) -> EnabledIntervalSet:
	get_interval(key)
	result = no_intervals_enabled()
	result[key] = True
	return result


def normalize_enabled(enabled: Mapping[str, bool]) -> EnabledIntervalSet:
	"""Complete a possibly partial selection so all 12 keys are present."""
	unknown = [k for k in enabled if k not in SEMITONES]
	if unknown:
		raise UnknownIntervalError(unknown[0])
	return {k: bool(enabled.get(k, False)) for k in SEMITONES}


def toggle_interval(enabled: Mapping[str, bool], key: str) -> EnabledIntervalSet:
	result = normalize_enabled(enabled)
	get_interval(key)
	result[key] = not result[key]
	return result


def enabled_keys(enabled: Mapping[str, bool]) -> List[str]:
	return [k for k in SEMITONES if enabled.get(k, False)]


def has_selection(enabled: Mapping[str, bool]) -> bool:
	return len(enabled_keys(enabled)) > 0


def get_intervals_for_scale(scale_key: str) -> EnabledIntervalSet:
	"""Enabled set for a scale preset. 'custom' yields the all-false set."""
	if scale_key not in SCALES:
		raise UnknownScaleError(scale_key)
	result = no_intervals_enabled()
	for key in SCALES[scale_key].intervals:
		result[key] = True
	return result


def find_matching_scale(enabled: Mapping[str, bool]) -> str:
	for scale_key in SCALE_KEYS:
		pattern = get_intervals_for_scale(scale_key)
		if all(bool(enabled.get(k, False)) == pattern[k] for k in SEMITONES):
			return scale_key
	return CUSTOM


def scale_pitches(scale_key: str, tonic: int) -> List[int]:
	if scale_key not in SCALE_STEPS:
		raise UnknownScaleError(scale_key)
	return [tonic + step for step in SCALE_STEPS[scale_key]]


def target_pitch_number(base: int, interval_key: str, ascending: bool) -> int:
	d = get_interval(interval_key).semitones
	return base + d if ascending else base - d


def get_valid_base_notes(interval_key: str, ascending: bool = True) -> List[Pitch]:
	"""Playable pitches whose target for this interval is also playable."""
	return [p for p in PLAYABLE_PITCHES if is_in_range(target_pitch_number(p.pitch_number, interval_key, ascending))]


DEFAULT_ENABLED_INTERVALS = get_intervals_for_scale("major")
