"""Chunked speech synthesis via edge-tts.

Narration text is split into requests under CHUNK_CHAR_LIMIT, each chunk is
synthesized to its own temp file concurrently, and the paths come back in
chunk order for assembly.
"""

import asyncio
import logging
import os
import re
import tempfile

import edge_tts

from painting_narrator.constants import (
    CHUNK_CHAR_LIMIT,
    DEFAULT_LANGUAGE,
    FETCH_CONCURRENCY,
    LANGUAGE_VOICES,
    TTS_CONNECT_TIMEOUT,
    TTS_RATE,
    TTS_RECEIVE_TIMEOUT,
    TTS_RETRY_BASE_DELAY,
    TTS_RETRY_COUNT,
    TTS_SLOW_RATE,
)
from painting_narrator.errors import ChunkFetchError
from painting_narrator.models import SpeechChunk

logger = logging.getLogger(__name__)

_SENTENCE_END_RE = re.compile(r"(?<=[.!?;:])\s+")


def voice_for_language(language: str) -> str:
    """Default voice for a language code like "en" or "en-GB"."""
    code = language.split("-")[0].lower()
    if code not in LANGUAGE_VOICES:
        raise ValueError(f"Unsupported language: {language}")
    return LANGUAGE_VOICES[code]


def _split_words(sentence: str, limit: int) -> list[str]:
    """Split an over-long sentence at word boundaries, hard-splitting huge words."""
    pieces = []
    current = ""
    for word in sentence.split(" "):
        while len(word) > limit:
            if current:
                pieces.append(current)
                current = ""
            pieces.append(word[:limit])
            word = word[limit:]
        if current and len(current) + 1 + len(word) > limit:
            pieces.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        pieces.append(current)
    return pieces


def split_text(text: str, limit: int = CHUNK_CHAR_LIMIT) -> list[str]:
    """Split text into pieces of at most `limit` chars.

    Whitespace is collapsed first. Sentences are packed greedily; a sentence
    longer than the limit falls back to word boundaries. Joining the pieces
    with single spaces gives back the collapsed text.
    """
    if limit < 1:
        raise ValueError("limit must be positive")
    normalized = " ".join(text.split())
    if not normalized:
        return []

    pieces = []
    current = ""
    for sentence in _SENTENCE_END_RE.split(normalized):
        parts = [sentence] if len(sentence) <= limit else _split_words(sentence, limit)
        for part in parts:
            if current and len(current) + 1 + len(part) > limit:
                pieces.append(current)
                current = part
            else:
                current = f"{current} {part}" if current else part
    if current:
        pieces.append(current)
    return pieces


def plan_chunks(
    text: str,
    language: str = DEFAULT_LANGUAGE,
    slow: bool = False,
    voice: str | None = None,
    limit: int = CHUNK_CHAR_LIMIT,
) -> list[SpeechChunk]:
    """Plan the ordered synthesis requests for a narration."""
    voice = voice or voice_for_language(language)
    rate = TTS_SLOW_RATE if slow else TTS_RATE
    return [
        SpeechChunk(index=i, text=piece, voice=voice, rate=rate)
        for i, piece in enumerate(split_text(text, limit))
    ]


async def fetch_single(chunk: SpeechChunk, output_path: str) -> None:
    """Synthesize one chunk to output_path with retry logic.

    Retries on network errors, service errors, or 0-byte output files.
    """
    last_error = None
    for attempt in range(TTS_RETRY_COUNT):
        try:
            communicate = edge_tts.Communicate(
                chunk.text,
                chunk.voice,
                rate=chunk.rate,
                connect_timeout=TTS_CONNECT_TIMEOUT,
                receive_timeout=TTS_RECEIVE_TIMEOUT,
            )
            await communicate.save(output_path)

            if os.path.exists(output_path) and os.path.getsize(output_path) > 0:
                return

            last_error = Exception(f"TTS produced 0-byte file for chunk {chunk.index}")
        except Exception as e:
            last_error = e

        if attempt < TTS_RETRY_COUNT - 1:
            delay = TTS_RETRY_BASE_DELAY * (2 ** attempt)
            logger.warning("Chunk %d attempt %d failed (%s), retrying in %.1fs",
                           chunk.index, attempt + 1, last_error, delay)
            await asyncio.sleep(delay)

    raise last_error


def _temp_path(chunk: SpeechChunk, temp_dir: str | None) -> str:
    fd, path = tempfile.mkstemp(prefix=f"chunk{chunk.index:03d}_", suffix=".mp3", dir=temp_dir)
    os.close(fd)
    return path


async def fetch_all(
    chunks: list[SpeechChunk],
    temp_dir: str | None = None,
    concurrency: int = FETCH_CONCURRENCY,
) -> list[str]:
    """Download every chunk concurrently.

    Returns temp file paths ordered by chunk index, whatever order the
    downloads finished in. Raises ChunkFetchError listing all temp paths if
    any download fails.
    """
    ordered = sorted(chunks, key=lambda c: c.index)
    paths = []
    try:
        for chunk in ordered:
            paths.append(_temp_path(chunk, temp_dir))
    except OSError as e:
        raise ChunkFetchError(f"Could not create temp file in {temp_dir}: {e}", paths=paths) from e

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def fetch(chunk: SpeechChunk, path: str) -> None:
        async with semaphore:
            await fetch_single(chunk, path)
        chunk.path = path

    results = await asyncio.gather(
        *(fetch(chunk, path) for chunk, path in zip(ordered, paths)),
        return_exceptions=True,
    )

    failures = [(chunk, r) for chunk, r in zip(ordered, results) if isinstance(r, BaseException)]
    if failures:
        chunk, error = failures[0]
        raise ChunkFetchError(
            f"{len(failures)}/{len(ordered)} chunks failed, first at chunk {chunk.index}: {error}",
            paths=paths,
        )
    return paths


def fetch_chunks(chunks: list[SpeechChunk], temp_dir: str | None = None,
                 concurrency: int = FETCH_CONCURRENCY) -> list[str]:
    """Sync wrapper around fetch_all()."""
    return asyncio.run(fetch_all(chunks, temp_dir, concurrency))
