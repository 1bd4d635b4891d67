import logging
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from schemas.transpose import TransposeStep
from services.errors import UnknownMode
from services.theory import MIDI_MAX, MIDI_MIN, SEMITONE_TO_NAME, parse_tonic, render_note

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    MAJOR = "major"
    NATURAL_MINOR = "naturalMinor"
    HARMONIC_MINOR = "harmonicMinor"


# Semitone offsets from the tonic for each scale degree (1..7)
SCALES: Dict[Mode, Tuple[int, ...]] = {
    Mode.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    Mode.NATURAL_MINOR: (0, 2, 3, 5, 7, 8, 10),
    Mode.HARMONIC_MINOR: (0, 2, 3, 5, 7, 8, 11),
}

# interval -> degree index, per mode
_DEGREE_INDEX: Dict[Mode, Dict[int, int]] = {
    mode: {interval: i for i, interval in enumerate(offsets)}
    for mode, offsets in SCALES.items()
}


def to_mode(mode: Union[Mode, str]) -> Mode:
    try:
        return Mode(mode)
    except ValueError:
        raise UnknownMode(f"Unknown mode: {mode!r}") from None


def get_scale(mode: Union[Mode, str]) -> Tuple[int, ...]:
    """Return the 7 semitone offsets for a mode. Raises UnknownMode."""
    return SCALES[to_mode(mode)]


class Key(NamedTuple):
    tonic: int
    mode: Mode

    @classmethod
    def parse(cls, tonic: str, mode: Union[Mode, str]) -> "Key":
        return cls(parse_tonic(tonic), to_mode(mode))

    @property
    def label(self) -> str:
        return f"{SEMITONE_TO_NAME[self.tonic % 12]} {self.mode.value}"


def _clamp(midi: int) -> int:
    return min(MIDI_MAX, max(MIDI_MIN, midi))


def _transpose_note(
    index: int, midi: int, from_key: Key, to_key: Key,
    from_scale: Sequence[int], to_scale: Sequence[int],
) -> TransposeStep:
    labels = {"index": index, "original_midi": midi,
              "from_key": from_key.label, "to_key": to_key.label}

    if midi < MIDI_MIN or midi > MIDI_MAX:
        return TransposeStep(**labels, action="passthrough", result_midi=midi)

    pitch_class = midi % 12
    interval = (pitch_class - from_key.tonic + 12) % 12
    degree_index = _DEGREE_INDEX[from_key.mode].get(interval)

    common = {
        **labels,
        "original": render_note(midi),
        "pitch_class": pitch_class,
        "interval_from_tonic": interval,
        "is_diatonic": degree_index is not None,
    }

    if degree_index is None:
        # Foreign to the source scale: plain chromatic shift
        shift = (to_key.tonic - from_key.tonic + 12) % 12
        result = _clamp(midi + shift)
        return TransposeStep(
            **common,
            action="chromatic shift",
            shift=shift,
            result_midi=result,
            result=render_note(result),
        )

    to_interval = to_scale[degree_index]
    ideal_tonic_midi = midi - interval
    tonic_octave = round((ideal_tonic_midi - from_key.tonic) / 12)
    new_tonic_midi = to_key.tonic + 12 * tonic_octave
    result = _clamp(new_tonic_midi + to_interval)
    return TransposeStep(
        **common,
        action="diatonic transpose",
        degree=degree_index + 1,
        from_interval=from_scale[degree_index],
        to_interval=to_interval,
        tonic_octave=tonic_octave,
        result_midi=result,
        result=render_note(result),
    )


def transpose(
    melody: Sequence[int],
    from_key: Key,
    to_key: Key,
    sink: Optional[Callable[[TransposeStep], None]] = None,
) -> List[int]:
    """Map a melody from one key to another, preserving scale degrees.

    Diatonic notes keep their degree in the target mode; notes outside the
    source scale are shifted by the tonic distance. Results are clamped to
    0-127. Values already outside 0-127 pass through unchanged.
    """
    from_scale = get_scale(from_key.mode)
    to_scale = get_scale(to_key.mode)
    from_key = Key(from_key.tonic % 12, to_mode(from_key.mode))
    to_key = Key(to_key.tonic % 12, to_mode(to_key.mode))

    result: List[int] = []
    for i, midi in enumerate(melody):
        step = _transpose_note(i, midi, from_key, to_key, from_scale, to_scale)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("transpose note: %s", step.model_dump(exclude_none=True))
        if sink is not None:
            sink(step)
        result.append(step.result_midi)
    return result


def transpose_with_trace(
    melody: Sequence[int], from_key: Key, to_key: Key
) -> Tuple[List[int], List[TransposeStep]]:
    steps: List[TransposeStep] = []
    result = transpose(melody, from_key, to_key, sink=steps.append)
    return result, steps
