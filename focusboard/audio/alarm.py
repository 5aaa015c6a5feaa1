"""Alarm playback using numpy + QSoundEffect.

The alarm plays either a user-chosen WAV file or a built-in tone.  The
built-in tone is synthesised with numpy (sine bursts shaped by an ADSR
envelope) and cached to disk on first use.

``AlarmPlayer`` is the audio handle handed to the timer engine: the
engine only ever calls :meth:`AlarmPlayer.play`.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR

logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
DEFAULT_ALARM_NAME = "alarm.wav"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit mono PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def _is_readable_wav(path: Path) -> bool:
    try:
        with wave.open(str(path), "rb") as wf:
            return wf.getnframes() > 0
    except (OSError, EOFError, wave.Error):
        return False


def generate_alarm_tone(repeats: int = 3) -> bytes:
    """Classic alarm-clock pattern: *repeats* groups of four quick beeps
    (A5 with a soft octave overtone), each group followed by a rest."""
    beep_dur = 0.09
    beep_gap = 0.06
    group_rest = 0.35

    beep = _sine(880.0, beep_dur) * 0.5 + _sine(1760.0, beep_dur) * 0.1
    beep = beep * _make_envelope(
        len(beep), attack=80, decay=300, sustain_level=0.6, release=600,
    )
    gap = np.zeros(int(SAMPLE_RATE * beep_gap))
    rest = np.zeros(int(SAMPLE_RATE * group_rest))

    parts: list[np.ndarray] = []
    for _ in range(max(1, repeats)):
        for _ in range(4):
            parts.append(beep)
            parts.append(gap)
        parts.append(rest)
    return _to_wav_bytes(np.concatenate(parts))


# ═══════════════════════════════════════════════════════════════════════════
#  ALARM PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class AlarmPlayer(QObject):
    """Plays the alarm on timer expiry.

    Usage::

        alarm = AlarmPlayer(parent=self)
        alarm.set_source(settings.alarm_sound_path)
        engine.set_alarm(alarm)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._source: Path | None = None
        self._effect = QSoundEffect(self)
        self._effect.setVolume(self._volume)
        self.set_source(None)

    # ── public API ────────────────────────────────────────────────────

    @property
    def source(self) -> Path | None:
        """The WAV file currently loaded."""
        return self._source

    @property
    def is_default(self) -> bool:
        return self._source == self.default_path

    @property
    def default_path(self) -> Path:
        return self._sounds_dir / DEFAULT_ALARM_NAME

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_volume(self, level: int) -> None:
        self._volume = max(0, min(level, 100)) / 100.0
        self._effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_source(self, path: str | Path | None) -> None:
        """Load a user-chosen WAV file, or the built-in tone for ``None``.

        A missing or unreadable file falls back to the built-in tone.
        """
        chosen = Path(path).expanduser() if path else None
        if chosen is not None and not chosen.is_file():
            logger.warning("Alarm file %s not found; using built-in tone", chosen)
            chosen = None
        elif chosen is not None and not _is_readable_wav(chosen):
            logger.warning("Alarm file %s is not a readable WAV; using built-in tone", chosen)
            chosen = None
        if chosen is None:
            chosen = self._ensure_default_tone()
        self._source = chosen
        self._effect.setSource(QUrl.fromLocalFile(str(chosen)))

    def play(self) -> None:
        """Restart the alarm from the beginning.  No-op when disabled."""
        if not self._enabled or self._source is None:
            return
        if self._effect.status() == QSoundEffect.Status.Error:
            if self.is_default:
                logger.warning("Alarm %s could not be decoded; skipping", self._source)
                return
            logger.warning("Alarm %s could not be decoded; using built-in tone", self._source)
            self.set_source(None)
        self._effect.stop()
        self._effect.play()

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_default_tone(self) -> Path:
        path = self.default_path
        if not path.exists():
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(generate_alarm_tone())
        return path
