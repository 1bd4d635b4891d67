import logging

from fastapi import HTTPException

from services.errors import NoteError

logger = logging.getLogger(__name__)


def bad_request(exc: NoteError) -> HTTPException:
    """Translate a NoteError into a 400 with a machine-readable code."""
    logger.warning("Rejected input (%s): %s", exc.code, exc)
    return HTTPException(
        status_code=400,
        detail={"code": exc.code, "message": str(exc)},
    )
