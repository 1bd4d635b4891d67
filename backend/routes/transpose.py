import logging

from fastapi import APIRouter

from routes.errors import bad_request
from schemas.transpose import TransposeRequest, TransposeResponse
from services.errors import NoteError
from services.scales import Key, transpose, transpose_with_trace
from services.theory import parse_melody, render_note

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/transpose")
def transpose_melody(req: TransposeRequest) -> dict:
    try:
        source_key = Key.parse(req.source_key.tonic, req.source_key.mode)
        target_key = Key.parse(req.target_key.tonic, req.target_key.mode)
        midi_numbers = parse_melody(req.melody)
    except NoteError as exc:
        raise bad_request(exc)

    trace = None
    if req.trace:
        result_midi, trace = transpose_with_trace(midi_numbers, source_key, target_key)
    else:
        result_midi = transpose(midi_numbers, source_key, target_key)

    # Parsed input may sit outside 0-127 and is passed through untouched
    try:
        input_notes = [render_note(m) for m in midi_numbers]
        result_notes = [render_note(m) for m in result_midi]
    except NoteError as exc:
        raise bad_request(exc)

    logger.info(
        "Transposed %d notes: %s -> %s",
        len(midi_numbers), source_key.label, target_key.label,
    )

    response = TransposeResponse(
        source_key=source_key.label,
        target_key=target_key.label,
        input_midi=midi_numbers,
        input_notes=input_notes,
        result_midi=result_midi,
        result_notes=result_notes,
        result=" ".join(result_notes),
        trace=trace,
    )
    return response.model_dump()
