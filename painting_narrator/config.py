"""Runtime configuration assembled from the environment and CLI arguments."""

import os
from dataclasses import dataclass

from painting_narrator.constants import (
    AUDIO_DIR,
    CATALOG_PATH,
    DEFAULT_LANGUAGE,
    DEFAULT_PLAYER,
    DESCRIPTION_MODEL,
    LOG_PATH,
)
from painting_narrator.errors import ConfigError
from painting_narrator.tts import voice_for_language

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be one of: {', '.join(sorted(_TRUE | _FALSE))}")


@dataclass
class NarratorConfig:
    api_key: str = ""
    catalog_path: str = CATALOG_PATH
    audio_dir: str = AUDIO_DIR
    log_path: str = LOG_PATH
    playback: bool = True
    player: str = DEFAULT_PLAYER
    model: str = DESCRIPTION_MODEL
    language: str = DEFAULT_LANGUAGE
    slow: bool = False
    voice: str | None = None       # overrides the language default
    temp_dir: str | None = None    # None → system temp dir

    @classmethod
    def from_env(cls) -> "NarratorConfig":
        """Read NARRATOR_* variables and OPENAI_API_KEY, falling back to defaults."""
        return cls(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
            catalog_path=os.environ.get("NARRATOR_CATALOG", CATALOG_PATH),
            audio_dir=os.environ.get("NARRATOR_AUDIO_DIR", AUDIO_DIR),
            log_path=os.environ.get("NARRATOR_LOG_PATH", LOG_PATH),
            playback=_env_flag("NARRATOR_PLAYBACK", True),
            player=os.environ.get("NARRATOR_PLAYER", DEFAULT_PLAYER),
            model=os.environ.get("NARRATOR_MODEL", DESCRIPTION_MODEL),
            language=os.environ.get("NARRATOR_LANGUAGE", DEFAULT_LANGUAGE),
            slow=_env_flag("NARRATOR_SLOW", False),
            voice=os.environ.get("NARRATOR_VOICE") or None,
            temp_dir=os.environ.get("NARRATOR_TEMP_DIR") or None,
        )

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigError("OPENAI_API_KEY is not set")
        if not self.player.strip() and self.playback:
            raise ConfigError("Playback is enabled but no player command is configured")
        if self.voice is None:
            try:
                voice_for_language(self.language)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        # ffmpeg's concat: protocol splits input paths on "|"
        if self.temp_dir and "|" in self.temp_dir:
            raise ConfigError(f"Temp dir may not contain '|': {self.temp_dir}")
