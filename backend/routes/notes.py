import logging

from fastapi import APIRouter, File, UploadFile

from config import settings
from routes.errors import bad_request
from schemas.notes import (
    MelodyUploadResponse,
    NoteParseRequest,
    NoteParseResponse,
    NoteRenderResponse,
)
from schemas.playback import PlaybackRequest
from services.errors import NoteError
from services.melody_io import (
    MIDI_EXTENSIONS,
    read_midi_melody,
    read_upload,
    sanitize_melody_text,
)
from services.playback import build_playback
from services.theory import midi_to_frequency, parse_melody, render_note, split_melody

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/notes/parse")
def parse_notes(req: NoteParseRequest) -> dict:
    tokens = split_melody(req.melody)
    try:
        midi_numbers = parse_melody(tokens)
        notes = [render_note(m) for m in midi_numbers]
    except NoteError as exc:
        raise bad_request(exc)

    return NoteParseResponse(tokens=tokens, midi=midi_numbers, notes=notes).model_dump()


@router.get("/notes/{midi}")
def get_note(midi: int) -> dict:
    try:
        note = render_note(midi)
    except NoteError as exc:
        raise bad_request(exc)

    return NoteRenderResponse(
        midi=midi,
        note=note,
        frequency_hz=round(midi_to_frequency(midi), 3),
    ).model_dump()


@router.post("/melody/upload")
def upload_melody(file: UploadFile = File(...)) -> dict:
    file_name = file.filename or ""
    try:
        ext, data = read_upload(file.file, file_name, settings.max_upload_bytes)
    except NoteError as exc:
        raise bad_request(exc)

    if ext in MIDI_EXTENSIONS:
        try:
            notes, midi_format, track_count = read_midi_melody(
                data, settings.midi_note_limit
            )
        except NoteError as exc:
            raise bad_request(exc)
        logger.info("Loaded %d notes from MIDI upload %s", len(notes), file_name)
        return MelodyUploadResponse(
            source="midi",
            file_name=file_name,
            melody=" ".join(notes),
            notes=notes,
            midi_format=midi_format,
            track_count=track_count,
        ).model_dump()

    melody = sanitize_melody_text(data.decode("utf-8", errors="replace"))
    logger.info("Loaded text melody upload %s (%d chars)", file_name, len(melody))
    return MelodyUploadResponse(
        source="text",
        file_name=file_name,
        melody=melody,
        notes=split_melody(melody),
    ).model_dump()


@router.post("/playback")
def playback(req: PlaybackRequest) -> dict:
    try:
        midi_numbers = parse_melody(req.melody)
    except NoteError as exc:
        raise bad_request(exc)

    return build_playback(midi_numbers).model_dump()
