"""Per-painting narration pipeline with failure isolation.

Each painting in the requested id range moves through
LOOKUP → DESCRIBE → LOG → SYNTHESIZE → DOWNLOAD → ASSEMBLE → PLAY → DONE.
A failure in any stage marks that painting FAILED and the run moves on to
the next id. Log-write and playback failures are not fatal.

Paintings are processed strictly one after another, so chunk temp files from
one painting are always gone before the next painting starts downloading.
"""

import logging
import os

from painting_narrator.assembly import assemble, remove_files
from painting_narrator.catalog import find_painting, sanitize_title
from painting_narrator.config import NarratorConfig
from painting_narrator.describer import build_request
from painting_narrator.errors import ChunkFetchError, DescriptionServiceError, LogWriteError
from painting_narrator.models import ItemResult, ItemState, PaintingRecord, RunSummary, SpeechChunk
from painting_narrator.narration_log import NarrationLog
from painting_narrator.playback import play
from painting_narrator.tts import fetch_chunks, plan_chunks

logger = logging.getLogger(__name__)


class NarrationPipeline:
    def __init__(
        self,
        paintings: list[PaintingRecord],
        describer,
        narration_log: NarrationLog,
        config: NarratorConfig,
    ):
        """`describer` needs a complete(prompt) -> str method (see DescriptionClient)."""
        self.paintings = paintings
        self.describer = describer
        self.narration_log = narration_log
        self.config = config

    def output_path(self, painting: PaintingRecord) -> str:
        return os.path.join(self.config.audio_dir, f"{sanitize_title(painting.title)}.mp3")

    def run(self, start_id: int, end_id: int) -> RunSummary:
        """Process every catalog id in [start_id, end_id], in ascending order."""
        if start_id > end_id:
            raise ValueError(f"start id {start_id} is greater than end id {end_id}")

        summary = RunSummary()
        for painting_id in range(start_id, end_id + 1):
            summary.results.append(self.process(painting_id))

        logger.info("Run %d-%d finished: %d done, %d failed, %d skipped",
                    start_id, end_id, len(summary.done), len(summary.failed), len(summary.skipped))
        return summary

    def process(self, painting_id: int) -> ItemResult:
        """Run one catalog id through every stage. Never raises."""
        result = ItemResult(painting_id=painting_id, state=ItemState.LOOKUP)

        try:
            painting = find_painting(self.paintings, painting_id)
            if painting is None:
                logger.debug("No painting with id %d, skipping", painting_id)
                result.state = ItemState.SKIPPED
                return result
            result.title = painting.title
            print(f"Processing: {painting.title} by {painting.painter_name}")

            result.state = ItemState.DESCRIBE
            request = build_request(painting)
            description = self.describer.complete(request.prompt).strip()
            if not description:
                raise DescriptionServiceError("Description service returned an empty completion")
            print(f"Description: {description}")

            result.state = ItemState.LOG
            self._log_description(painting, description)

            result.state = ItemState.SYNTHESIZE
            chunks = plan_chunks(
                description,
                language=self.config.language,
                slow=self.config.slow,
                voice=self.config.voice,
            )

            result.state = ItemState.DOWNLOAD
            paths = self._download(chunks)

            result.state = ItemState.ASSEMBLE
            audio = assemble(paths, self.output_path(painting), painting_id=painting.id)
            result.output_path = audio.path
            print(f"Audio saved as {audio.path}")

            if self.config.playback:
                result.state = ItemState.PLAY
                play(audio.path, player=self.config.player)
        except Exception as e:
            logger.error("Error processing painting ID %d (%s) during %s: %s",
                         painting_id, result.title, result.state.value, e)
            result.failed_at = result.state
            result.state = ItemState.FAILED
            result.error = str(e)
            return result

        result.state = ItemState.DONE
        return result

    def _log_description(self, painting: PaintingRecord, description: str) -> None:
        try:
            self.narration_log.append(painting.title, description)
        except LogWriteError as e:
            logger.warning("Error writing to %s: %s", e.path, e.cause)
            return
        print(f'Description for "{painting.title}" appended to {self.narration_log.path}.')

    def _download(self, chunks: list[SpeechChunk]) -> list[str]:
        try:
            return fetch_chunks(chunks, temp_dir=self.config.temp_dir)
        except ChunkFetchError as e:
            remove_files(e.paths)
            raise
