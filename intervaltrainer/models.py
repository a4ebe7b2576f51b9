from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


Direction = Literal["ascending", "descending", "both"]
PlaybackMode = Literal["melodic", "harmonic"]
EnabledIntervalSet = Dict[str, bool]


def _default_enabled() -> EnabledIntervalSet:
	from .intervals import DEFAULT_ENABLED_INTERVALS
	return dict(DEFAULT_ENABLED_INTERVALS)


class Pitch(BaseModel):
	model_config = ConfigDict(frozen=True)

	pitch_number: int
	display_name: str
	sample_key: str


class TargetPitch(BaseModel):
	model_config = ConfigDict(frozen=True)

	pitch_number: int
	display_name: str


class Interval(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	semitones: int = Field(ge=1, le=12)
	abbrev: str


class Scale(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	intervals: List[str]


class IntervalQuestion(BaseModel):
	model_config = ConfigDict(frozen=True)

	base_pitch: Pitch
	target_pitch: TargetPitch
	interval_key: str
	interval_name: str
	is_ascending: bool


class PracticeSettings(BaseModel):
	"""In-memory practice configuration held by the caller between questions."""

	enabled_intervals: EnabledIntervalSet = Field(default_factory=_default_enabled)
	direction: Direction = Field(default="ascending")
	sustain_duration: float = Field(default=1.5, ge=0.5, le=4.0)
	playback_mode: PlaybackMode = Field(default="melodic")
	locked_base_pitch: Optional[Pitch] = None

	@field_validator("enabled_intervals")
	@classmethod
	def _complete_enabled(cls, v: EnabledIntervalSet) -> EnabledIntervalSet:
		from .intervals import normalize_enabled
		return normalize_enabled(v)

	def matching_scale(self) -> str:
		from .intervals import find_matching_scale
		return find_matching_scale(self.enabled_intervals)

	def can_start(self) -> bool:
		return any(self.enabled_intervals.values())


class Score(BaseModel):
	correct: int = 0
	total: int = 0

	@property
	def percentage(self) -> int:
		if self.total == 0:
			return 0
		# round half up: 2/3 -> 67
		return int(self.correct * 100 / self.total + 0.5)


class AnswerRecord(BaseModel):
	interval_key: str
	chosen: str
	correct: bool
