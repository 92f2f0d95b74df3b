"""Data models for painting narration."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class PaintingRecord:
    id: int
    title: str
    painter_name: str


@dataclass
class NarrationRequest:
    painting: PaintingRecord
    prompt: str


@dataclass
class SpeechChunk:
    index: int         # position in the narration, authoritative merge order
    text: str
    voice: str         # edge-tts voice short name
    rate: str          # relative rate string like "-25%"
    path: str | None = None  # temp file, populated by the fetcher


@dataclass
class AssembledAudio:
    path: str
    painting_id: int


@dataclass
class NarrationLogEntry:
    title: str
    description: str


class ItemState(str, Enum):
    LOOKUP = "lookup"
    DESCRIBE = "describe"
    LOG = "log"
    SYNTHESIZE = "synthesize"
    DOWNLOAD = "download"
    ASSEMBLE = "assemble"
    PLAY = "play"
    DONE = "done"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ItemResult:
    painting_id: int
    state: ItemState
    title: str = ""
    output_path: str | None = None
    error: str | None = None
    failed_at: ItemState | None = None  # stage that raised, for FAILED items


@dataclass
class RunSummary:
    results: list[ItemResult] = field(default_factory=list)

    def _with_state(self, state: ItemState) -> list[ItemResult]:
        return [r for r in self.results if r.state == state]

    @property
    def done(self) -> list[ItemResult]:
        return self._with_state(ItemState.DONE)

    @property
    def failed(self) -> list[ItemResult]:
        return self._with_state(ItemState.FAILED)

    @property
    def skipped(self) -> list[ItemResult]:
        return self._with_state(ItemState.SKIPPED)
