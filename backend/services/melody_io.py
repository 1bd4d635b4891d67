import io
import logging
import os
import re
from typing import BinaryIO, List, Tuple

import mido

from services.errors import InvalidMidiFile, InvalidUpload
from services.theory import MIDI_MAX, MIDI_MIN, render_note

logger = logging.getLogger(__name__)

# Anything that cannot appear in a note token becomes a separator
_NON_NOTE_RE = re.compile(r"[^A-Ga-g#b0-9\s-]")
_WS_RE = re.compile(r"\s+")

MIDI_EXTENSIONS = frozenset({".mid", ".midi"})
TEXT_EXTENSIONS = frozenset({".txt"})


def read_upload(fh: BinaryIO, file_name: str, max_bytes: int) -> Tuple[str, bytes]:
    """Read an uploaded melody file, returning (extension, data).

    Only text and Standard MIDI files are accepted, up to ``max_bytes``.
    """
    ext = os.path.splitext(file_name)[1].lower()
    if ext not in TEXT_EXTENSIONS and ext not in MIDI_EXTENSIONS:
        raise InvalidUpload(f"Unsupported file type: {file_name!r}")
    data = fh.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise InvalidUpload(f"Upload exceeds {max_bytes} bytes: {file_name!r}")
    return ext, data


def sanitize_melody_text(content: str) -> str:
    """Strip a free-form text file down to whitespace-separated note tokens."""
    content = _NON_NOTE_RE.sub(" ", content.strip())
    return _WS_RE.sub(" ", content).strip()


def _iter_note_numbers(mf: mido.MidiFile) -> List[int]:
    notes: List[int] = []
    for track in mf.tracks:
        for msg in track:
            if getattr(msg, "type", None) != "note_on":
                continue
            if getattr(msg, "velocity", 0) <= 0:
                continue
            notes.append(int(msg.note))
    return notes


def read_midi_melody(data: bytes, limit: int) -> Tuple[List[str], int, int]:
    """Extract note-on events from a Standard MIDI File.

    Returns (note_names, midi_format, track_count). Notes are taken track
    by track in file order and truncated to ``limit``.
    """
    try:
        mf = mido.MidiFile(file=io.BytesIO(data))
    except (OSError, EOFError, ValueError, KeyError, IndexError) as exc:
        raise InvalidMidiFile(f"Could not parse MIDI file: {exc}") from exc

    names = [
        render_note(n)
        for n in _iter_note_numbers(mf)
        if MIDI_MIN <= n <= MIDI_MAX
    ][:limit]
    logger.info(
        "Read MIDI file: format=%d tracks=%d notes=%d",
        mf.type, len(mf.tracks), len(names),
    )
    return names, mf.type, len(mf.tracks)
