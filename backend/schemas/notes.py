from typing import List, Optional

from pydantic import BaseModel


class NoteParseRequest(BaseModel):
    melody: str


class NoteParseResponse(BaseModel):
    tokens: List[str]
    midi: List[int]
    notes: List[str]


class NoteRenderResponse(BaseModel):
    midi: int
    note: str
    frequency_hz: float


class MelodyUploadResponse(BaseModel):
    source: str
    file_name: Optional[str] = None
    melody: str
    notes: List[str]
    midi_format: Optional[int] = None
    track_count: Optional[int] = None
