SR = 44100

import io
import logging
from typing import Callable, List, Optional, Protocol, cast
import numpy as np
import numpy.typing as npt
import soundfile as sf

from .notes import pitch_to_frequency, pitch_to_sample_key

logger = logging.getLogger(__name__)

# Second note of a melodic interval starts this fraction of the sustain after the first
MELODIC_ONSET = 0.6


class AudioPlayer(Protocol):
	def play_note(self, pitch_number: int) -> None: ...

	def play_interval(self, pitch1: int, pitch2: int, mode: str = "melodic") -> None: ...

	def set_sustain_duration(self, seconds: float) -> None: ...


def tone(freq: float, dur: float, waveform: str = "sine") -> npt.NDArray[np.float32]:
	"""Generate a single tone with a simple attack/release envelope.

	Args:
		freq: Frequency in Hz
		dur: Duration in seconds
		waveform: One of {"sine","triangle","saw"}
	"""
	t = np.linspace(0.0, dur, int(SR * dur), endpoint=False, dtype=np.float32)
	omega = 2.0 * np.pi * freq
	if waveform == "sine":
		x = np.sin(omega * t).astype(np.float32)
	elif waveform == "triangle":
		x = ((2.0 / np.pi) * np.arcsin(np.sin(omega * t))).astype(np.float32)
	elif waveform == "saw":
		phase = (freq * t).astype(np.float32)
		x = (2.0 * (phase - np.floor(phase + 0.5))).astype(np.float32)
	else:
		raise ValueError(f"unknown waveform: {waveform!r}")

	# 5ms attack, release over the last tenth of the note (at most 200ms)
	attack = min(int(0.005 * SR), len(x))
	release = min(int(min(0.2, dur / 10.0) * SR), len(x) - attack)
	env = np.ones_like(x, dtype=np.float32)
	if attack > 0:
		env[:attack] = np.linspace(0.0, 1.0, attack, endpoint=False, dtype=np.float32)
	if release > 0:
		env[-release:] = np.linspace(1.0, 0.0, release, endpoint=False, dtype=np.float32)

	return cast(npt.NDArray[np.float32], (x * env).astype(np.float32))


def _normalize(x: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
	max_abs = float(np.max(np.abs(x))) if x.size else 1.0
	if max_abs > 1.0:
		x = (x / max_abs).astype(np.float32)
	return x


def melodic(f1: float, f2: float, onset: float, dur: float, waveform: str = "sine") -> npt.NDArray[np.float32]:
	"""Two tones, the second starting `onset` seconds after the first; tails overlap."""
	a = tone(f1, dur, waveform)
	b = tone(f2, dur, waveform)
	start = int(SR * onset)
	out = np.zeros(max(len(a), start + len(b)), dtype=np.float32)
	out[: len(a)] += a
	out[start : start + len(b)] += b
	return _normalize(out)


def harmonic(f1: float, f2: float, dur: float, waveform: str = "sine") -> npt.NDArray[np.float32]:
	return _normalize(tone(f1, dur, waveform) + tone(f2, dur, waveform))


def wav_bytes(x: npt.NDArray[np.float32]) -> bytes:
	buf = io.BytesIO()
	sf.write(buf, x, SR, format="WAV")
	return buf.getvalue()


class SynthEngine:
	"""AudioPlayer that synthesizes notes and hands WAV bytes to a sink.

	Without a sink, rendered clips are kept in `rendered` in play order.
	"""

	def __init__(self, sink: Optional[Callable[[bytes], None]] = None, waveform: str = "sine", volume: float = 0.9) -> None:
		self.sustain_duration = 1.5
		self.waveform = waveform
		self.volume = volume
		self.rendered: List[bytes] = []
		self.sink = sink or self.rendered.append

	def set_sustain_duration(self, seconds: float) -> None:
		if seconds <= 0:
			raise ValueError("sustain duration must be positive")
		self.sustain_duration = float(seconds)

	def render_note(self, pitch_number: int) -> npt.NDArray[np.float32]:
		x = tone(pitch_to_frequency(pitch_number), self.sustain_duration, self.waveform)
		return (x * self.volume).astype(np.float32)

	def render_interval(self, pitch1: int, pitch2: int, mode: str = "melodic") -> npt.NDArray[np.float32]:
		f1, f2 = pitch_to_frequency(pitch1), pitch_to_frequency(pitch2)
		if mode == "harmonic":
			x = harmonic(f1, f2, self.sustain_duration, self.waveform)
		elif mode == "melodic":
			x = melodic(f1, f2, MELODIC_ONSET * self.sustain_duration, self.sustain_duration, self.waveform)
		else:
			raise ValueError(f"unknown playback mode: {mode!r}")
		return (x * self.volume).astype(np.float32)

	def play_note(self, pitch_number: int) -> None:
		logger.debug("play note %s", pitch_to_sample_key(pitch_number))
		self.sink(wav_bytes(self.render_note(pitch_number)))

	def play_interval(self, pitch1: int, pitch2: int, mode: str = "melodic") -> None:
		logger.debug("play %s interval %s -> %s", mode, pitch_to_sample_key(pitch1), pitch_to_sample_key(pitch2))
		self.sink(wav_bytes(self.render_interval(pitch1, pitch2, mode)))
