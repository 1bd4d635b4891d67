from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173"]
    midi_note_limit: int = 32
    max_upload_bytes: int = 1_000_000
    playback_interval_sec: float = 0.5
    playback_note_sec: float = 0.4
    playback_gain: float = 0.08
    playback_min_midi: int = 21
    playback_max_midi: int = 108

    class Config:
        env_file = ".env"


settings = Settings()
