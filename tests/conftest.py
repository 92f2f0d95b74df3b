"""Shared fixtures for painting narrator tests."""

import json
import subprocess
from unittest.mock import MagicMock

import pytest
from pydub import AudioSegment

from painting_narrator.config import NarratorConfig
from painting_narrator.models import PaintingRecord


@pytest.fixture
def tiny_mp3(tmp_path):
    """Generate a 100ms silent MP3 for testing."""
    path = tmp_path / "test.mp3"
    silence = AudioSegment.silent(duration=100)
    silence.export(str(path), format="mp3")
    return path


@pytest.fixture
def catalog_data():
    return {
        "ListPainting": [
            {"id": 1, "title": "Mona Lisa",
             "author": [{"firstname": "Leonardo", "lastname": "da Vinci"}]},
            {"id": 2, "title": "The Starry Night",
             "author": [{"firstname": "Vincent", "lastname": "van Gogh"}]},
            {"id": 3, "title": "Girl with a Pearl Earring",
             "author": [{"firstname": "Johannes", "lastname": "Vermeer"}]},
            {"id": 5, "title": "The Night Watch",
             "author": [{"firstname": "Rembrandt", "lastname": "van Rijn"}]},
        ]
    }


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    path = tmp_path / "PaintingsAll_EN.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


@pytest.fixture
def paintings():
    return [
        PaintingRecord(id=1, title="Mona Lisa", painter_name="Leonardo da Vinci"),
        PaintingRecord(id=2, title="The Starry Night", painter_name="Vincent van Gogh"),
        PaintingRecord(id=3, title="Girl with a Pearl Earring", painter_name="Johannes Vermeer"),
    ]


@pytest.fixture
def config(tmp_path):
    """Config writing everything under tmp_path, playback off."""
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return NarratorConfig(
        api_key="sk-test",
        catalog_path=str(tmp_path / "PaintingsAll_EN.json"),
        audio_dir=str(tmp_path / "Audio"),
        log_path=str(tmp_path / "descriptions.txt"),
        playback=False,
        temp_dir=str(temp_dir),
    )


@pytest.fixture
def no_retry_delay(monkeypatch):
    monkeypatch.setattr("painting_narrator.tts.TTS_RETRY_BASE_DELAY", 0)


def mock_communicate(payload=b"ID3fake-mp3-data"):
    """Create a mock edge_tts.Communicate factory that writes `payload`."""
    def factory(text, voice, **kwargs):
        mock = MagicMock()
        async def save(path):
            with open(path, "wb") as f:
                f.write(payload)
        mock.save = save
        return mock
    return factory


def fake_ffmpeg_run(calls=None):
    """subprocess.run stand-in that 'concatenates' by writing the output path."""
    def run(cmd, **kwargs):
        if calls is not None:
            calls.append(cmd)
        with open(cmd[-1], "wb") as f:
            f.write(b"joined")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
    return run


class FakeDescriber:
    """Describer returning canned text per title, or raising for some titles."""

    def __init__(self, descriptions=None, failures=None):
        self.descriptions = descriptions or {}
        self.failures = failures or {}
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        for title, error in self.failures.items():
            if f'"{title}"' in prompt:
                raise error
        for title, text in self.descriptions.items():
            if f'"{title}"' in prompt:
                return text
        return "A painting."
