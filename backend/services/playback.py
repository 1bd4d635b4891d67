from typing import Sequence

from config import settings
from schemas.playback import PlaybackNote, PlaybackResponse
from services.theory import midi_to_frequency, render_note


def build_playback(
    midi_numbers: Sequence[int],
    interval_sec: float | None = None,
    note_sec: float | None = None,
) -> PlaybackResponse:
    """Schedule a melody as evenly spaced sine notes.

    Notes outside the playable range are skipped but keep their slot.
    """
    interval = settings.playback_interval_sec if interval_sec is None else interval_sec
    duration = settings.playback_note_sec if note_sec is None else note_sec

    scheduled = []
    for i, midi in enumerate(midi_numbers):
        if midi < settings.playback_min_midi or midi > settings.playback_max_midi:
            continue
        scheduled.append(PlaybackNote(
            pitch_midi=midi,
            note=render_note(midi),
            frequency_hz=round(midi_to_frequency(midi), 3),
            start_sec=round(i * interval, 6),
            duration_sec=duration,
            gain=settings.playback_gain,
        ))

    total = round(len(midi_numbers) * interval, 6) if midi_numbers else 0.0
    return PlaybackResponse(total_sec=total, notes=scheduled)
