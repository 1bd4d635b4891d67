import re
from typing import Iterable, List, Union

from services.errors import InvalidFormat, OutOfRange, UnknownNote

# Pitch-class map: note name -> semitone offset from C
PITCH_CLASS = {
    "C": 0, "C#": 1, "Db": 1,
    "D": 2, "D#": 3, "Eb": 3,
    "E": 4,
    "F": 5, "F#": 6, "Gb": 6,
    "G": 7, "G#": 8, "Ab": 8,
    "A": 9, "A#": 10, "Bb": 10,
    "B": 11,
}

# Canonical spelling for rendered notes (always sharps)
SEMITONE_TO_NAME = [
    "C", "C#", "D", "D#", "E", "F",
    "F#", "G", "G#", "A", "A#", "B",
]

DEFAULT_OCTAVE = 4
MIDI_MIN = 0
MIDI_MAX = 127

# Regex: letter, optional accidental, optional signed ASCII octave
_NOTE_RE = re.compile(r"^([A-Ga-g])([#b]?)([+-]?[0-9]{1,4})?$")


def _normalize_accidentals(text: str) -> str:
    return text.replace("♯", "#").replace("♭", "b")


def parse_note(text: str) -> int:
    """Return the MIDI number for a note name like 'C4', 'Bb3', 'f#-1'.

    The octave defaults to 4. No range check is applied here.
    Raises InvalidFormat or UnknownNote.
    """
    raw = _normalize_accidentals((text or "").strip())
    m = _NOTE_RE.match(raw)
    if not m:
        raise InvalidFormat(f"Invalid note format: {text!r}")

    letter, accidental, octave_str = m.groups()
    name = letter.upper() + accidental
    if name not in PITCH_CLASS:
        raise UnknownNote(f"Unknown note: {name!r}")

    octave = int(octave_str) if octave_str is not None else DEFAULT_OCTAVE
    return PITCH_CLASS[name] + 12 * (octave + 1)


def render_note(midi: int) -> str:
    """Render a MIDI number (0-127) as a sharp-spelled name, e.g. 61 -> 'C#4'."""
    if midi < MIDI_MIN or midi > MIDI_MAX:
        raise OutOfRange(f"MIDI number out of range: {midi}")
    octave = midi // 12 - 1
    return f"{SEMITONE_TO_NAME[midi % 12]}{octave}"


def parse_tonic(key: str) -> int:
    """Return semitone value (0-11) for a tonic string like 'C', 'F#', 'Bb'.

    Raises UnknownNote if the tonic is not recognized.
    """
    name = _normalize_accidentals((key or "").strip())
    if name not in PITCH_CLASS:
        raise UnknownNote(f"Unknown tonic: {key!r}")
    return PITCH_CLASS[name]


def split_melody(text: str) -> List[str]:
    return text.split()


def parse_melody(melody: Union[str, Iterable[str]]) -> List[int]:
    """Parse a whitespace-separated melody (or a token list) into MIDI numbers.

    Fails on the first malformed token; the error names the token and
    its position.
    """
    tokens = split_melody(melody) if isinstance(melody, str) else list(melody)
    result: List[int] = []
    for i, token in enumerate(tokens):
        try:
            result.append(parse_note(token))
        except (InvalidFormat, UnknownNote) as exc:
            raise type(exc)(f"Token {i} ({token!r}): {exc}") from exc
    return result


def render_melody(midi_numbers: Iterable[int]) -> str:
    return " ".join(render_note(m) for m in midi_numbers)


def midi_to_frequency(midi: int) -> float:
    """Equal-tempered frequency in Hz, A4 (69) = 440."""
    return 440.0 * 2 ** ((midi - 69) / 12)
