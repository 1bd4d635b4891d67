from typing import List

from pydantic import BaseModel


class PlaybackRequest(BaseModel):
    melody: str


class PlaybackNote(BaseModel):
    pitch_midi: int
    note: str
    frequency_hz: float
    start_sec: float
    duration_sec: float
    gain: float


class PlaybackResponse(BaseModel):
    total_sec: float
    notes: List[PlaybackNote]
