class NoteError(ValueError):
    """Base class for note parsing, rendering and key errors."""

    code = "NoteError"


class InvalidFormat(NoteError):
    code = "InvalidFormat"


class UnknownNote(NoteError):
    code = "UnknownNote"


class OutOfRange(NoteError):
    code = "OutOfRange"


class UnknownMode(NoteError):
    code = "UnknownMode"


class InvalidMidiFile(NoteError):
    code = "InvalidMidiFile"


class InvalidUpload(NoteError):
    code = "InvalidUpload"
