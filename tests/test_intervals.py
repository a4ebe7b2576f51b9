import pytest

from intervaltrainer.errors import UnknownIntervalError, UnknownScaleError
from intervaltrainer.intervals import (
	CUSTOM,
	INTERVALS,
	SCALE_KEYS,
	SCALE_STEPS,
	SCALES,
	SEMITONES,
	all_intervals_enabled,
	enabled_keys,
	find_matching_scale,
	get_intervals_for_scale,
	get_valid_base_notes,
	has_selection,
	interval_keys,
	no_intervals_enabled,
	normalize_enabled,
	scale_names,
	scale_pitches,
	single_interval,
	toggle_interval,
)


def test_interval_table_ordered_and_unique():
	keys = interval_keys()
	assert keys == ["m2", "M2", "m3", "M3", "P4", "TT", "P5", "m6", "M6", "m7", "M7", "P8"]
	distances = [INTERVALS[k].semitones for k in keys]
	assert distances == list(range(1, 13))
	assert INTERVALS["TT"].name == "Tritone"
	assert INTERVALS["P8"].abbrev == "P8"


def test_major_and_phrygian_patterns():
	major = get_intervals_for_scale("major")
	assert {k for k, v in major.items() if v} == {"M2", "M3", "P4", "P5", "M6", "M7", "P8"}
	assert len(major) == 12
	phrygian = get_intervals_for_scale("phrygian")
	assert {k for k, v in phrygian.items() if v} == {"m2", "m3", "P4", "P5", "m6", "m7", "P8"}


def test_custom_scale_is_all_false():
	assert get_intervals_for_scale(CUSTOM) == no_intervals_enabled()


def test_scale_round_trip():
	for key in SCALE_KEYS:
		assert find_matching_scale(get_intervals_for_scale(key)) == key


def test_non_matching_selections_are_custom():
	assert find_matching_scale(all_intervals_enabled()) == CUSTOM
	assert find_matching_scale(no_intervals_enabled()) == CUSTOM
	# major plus one extra interval no longer matches
	extra = get_intervals_for_scale("major")
	extra["m2"] = True
	assert find_matching_scale(extra) == CUSTOM
	assert find_matching_scale(single_interval("P5")) == CUSTOM


def test_scales_include_octave_and_steps_agree():
	for key in SCALE_KEYS:
		ivs = SCALES[key].intervals
		assert ivs[-1] == "P8"
		steps = SCALE_STEPS[key]
		assert steps[0] == 0 and steps[-1] == 12
		assert steps[1:] == [SEMITONES[k] for k in ivs]
	assert SCALE_STEPS["major"] == [0, 2, 4, 5, 7, 9, 11, 12]
	assert SCALE_STEPS["lydian"] == [0, 2, 4, 6, 7, 9, 11, 12]


def test_scale_pitches():
	assert scale_pitches("natural_minor", 57) == [57, 59, 60, 62, 64, 65, 67, 69]
	with pytest.raises(UnknownScaleError):
		scale_pitches(CUSTOM, 60)
	with pytest.raises(UnknownScaleError):
		get_intervals_for_scale("blues")


def test_enabled_set_helpers():
	s = single_interval("M3")
	assert enabled_keys(s) == ["M3"]
	t = toggle_interval(s, "P8")
	assert enabled_keys(t) == ["M3", "P8"]
	assert enabled_keys(s) == ["M3"]
	assert not has_selection(no_intervals_enabled())
	assert has_selection(t)
	assert normalize_enabled({"P5": True}) == single_interval("P5")
	with pytest.raises(UnknownIntervalError):
		normalize_enabled({"P9": True})
	with pytest.raises(UnknownIntervalError):
		single_interval("nope")


def test_valid_base_notes_keep_target_in_range():
	asc = get_valid_base_notes("P8", ascending=True)
	assert [p.pitch_number for p in asc] == list(range(48, 72))
	desc = get_valid_base_notes("P8", ascending=False)
	assert [p.pitch_number for p in desc] == list(range(60, 84))
	assert len(get_valid_base_notes("m2")) == 35


def test_scale_names_in_match_order():
	names = scale_names()
	assert names == ["major", "natural_minor", "harmonic_minor", "melodic_minor", "dorian", "phrygian", "lydian", "mixolydian"]
	assert CUSTOM not in names
	names.append("blues")
	assert "blues" not in scale_names()
