from typing import List, Optional

from pydantic import BaseModel


class KeySpec(BaseModel):
    tonic: str
    mode: str


class TransposeRequest(BaseModel):
    melody: str
    source_key: KeySpec
    target_key: KeySpec
    trace: bool = False


class TransposeStep(BaseModel):
    """Per-note record of the decision taken by the transposer."""

    index: int
    original_midi: int
    original: Optional[str] = None
    pitch_class: Optional[int] = None
    from_key: str
    to_key: str
    interval_from_tonic: Optional[int] = None
    is_diatonic: bool = False
    action: str
    shift: Optional[int] = None
    degree: Optional[int] = None
    from_interval: Optional[int] = None
    to_interval: Optional[int] = None
    tonic_octave: Optional[int] = None
    result_midi: int
    result: Optional[str] = None


class TransposeResponse(BaseModel):
    source_key: str
    target_key: str
    input_midi: List[int]
    input_notes: List[str]
    result_midi: List[int]
    result_notes: List[str]
    result: str
    trace: Optional[List[TransposeStep]] = None
