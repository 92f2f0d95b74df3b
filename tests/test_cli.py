"""Tests for CLI module."""

from unittest.mock import MagicMock, patch

import pytest

from painting_narrator.cli import main
from painting_narrator.models import ItemResult, ItemState, RunSummary

from conftest import fake_ffmpeg_run, mock_communicate


@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("NARRATOR_AUDIO_DIR", str(tmp_path / "Audio"))
    monkeypatch.setenv("NARRATOR_LOG_PATH", str(tmp_path / "descriptions.txt"))
    monkeypatch.setenv("NARRATOR_TEMP_DIR", str(tmp_path))
    monkeypatch.delenv("NARRATOR_PLAYBACK", raising=False)


def _completion_client(text="A portrait..."):
    message = MagicMock()
    message.content = text
    choice = MagicMock()
    choice.message = message
    client = MagicMock()
    client.chat.completions.create.return_value.choices = [choice]
    return client


# --- Subcommand routing ---

def test_cli_no_command_prints_help(capsys):
    with patch("sys.argv", ["painting-narrator"]):
        main()
    assert "usage" in capsys.readouterr().out.lower()


def test_cli_version(capsys):
    with pytest.raises(SystemExit):
        with patch("sys.argv", ["painting-narrator", "--version"]):
            main()
    assert "0.1.0" in capsys.readouterr().out


def test_cli_list(catalog_file, capsys):
    with patch("sys.argv", ["painting-narrator", "list", "--catalog", str(catalog_file)]):
        main()
    out = capsys.readouterr().out
    assert "Mona Lisa" in out
    assert "Rembrandt van Rijn" in out


def test_cli_list_missing_catalog(tmp_path, capsys):
    with pytest.raises(SystemExit):
        with patch("sys.argv", ["painting-narrator", "list", "--catalog", str(tmp_path / "none.json")]):
            main()
    assert "Catalog not found" in capsys.readouterr().err


@patch("painting_narrator.describer.OpenAI")
@patch("painting_narrator.tts.edge_tts.Communicate")
@patch("shutil.which", return_value="/usr/bin/ffmpeg")
def test_cli_run_basic(mock_which, mock_comm, mock_openai, catalog_file, tmp_path, capsys):
    """run narrates the range and writes audio + log."""
    mock_comm.side_effect = mock_communicate()
    mock_openai.return_value = _completion_client()

    with patch("painting_narrator.assembly.subprocess.run", side_effect=fake_ffmpeg_run()):
        with patch("sys.argv", ["painting-narrator", "run", "--start", "1", "--end", "4",
                                "--catalog", str(catalog_file), "--no-play"]):
            main()

    assert (tmp_path / "Audio" / "Mona_Lisa.mp3").exists()
    assert (tmp_path / "Audio" / "Girl_with_a_Pearl_Earring.mp3").exists()
    assert (tmp_path / "descriptions.txt").read_text(encoding="utf-8").count("Painting: ") == 3
    out = capsys.readouterr().out
    assert "3 narrated, 0 failed, 1 not in catalog" in out
    assert mock_openai.call_args.kwargs["api_key"] == "sk-test"


@patch("painting_narrator.cli.NarrationPipeline")
@patch("painting_narrator.cli.DescriptionClient")
@patch("shutil.which", return_value="/usr/bin/ffmpeg")
def test_cli_run_overrides_config(mock_which, mock_client, mock_pipeline, catalog_file, capsys):
    mock_pipeline.return_value.run.return_value = RunSummary(results=[
        ItemResult(painting_id=2, state=ItemState.FAILED, title="The Starry Night", error="boom"),
    ])
    argv = ["painting-narrator", "run", "--start", "2", "--end", "2", "--catalog", str(catalog_file),
            "--model", "gpt-4o-mini", "--lang", "fr", "--slow", "--player", "cvlc --play-and-exit"]

    with patch("sys.argv", argv):
        main()

    config = mock_pipeline.call_args.args[3]
    assert config.language == "fr"
    assert config.slow is True
    assert config.player == "cvlc --play-and-exit"
    assert config.playback is True
    assert mock_client.call_args.kwargs["model"] == "gpt-4o-mini"
    mock_pipeline.return_value.run.assert_called_once_with(2, 2)
    assert "[fail] 2 The Starry Night: boom" in capsys.readouterr().out


def test_cli_run_without_api_key(monkeypatch, catalog_file, capsys):
    monkeypatch.delenv("OPENAI_API_KEY")
    with pytest.raises(SystemExit):
        with patch("sys.argv", ["painting-narrator", "run", "--start", "1", "--end", "1",
                                "--catalog", str(catalog_file)]):
            main()
    assert "OPENAI_API_KEY" in capsys.readouterr().err


def test_cli_run_inverted_range(catalog_file, capsys):
    with pytest.raises(SystemExit):
        with patch("sys.argv", ["painting-narrator", "run", "--start", "3", "--end", "1",
                                "--catalog", str(catalog_file)]):
            main()
    assert "greater than" in capsys.readouterr().err


@patch("shutil.which", return_value=None)
def test_cli_run_without_ffmpeg(mock_which, catalog_file):
    with pytest.raises(SystemExit):
        with patch("sys.argv", ["painting-narrator", "run", "--start", "1", "--end", "1",
                                "--catalog", str(catalog_file)]):
            main()


@patch("painting_narrator.cli.DescriptionClient")
@patch("shutil.which", return_value="/usr/bin/ffmpeg")
def test_cli_run_unknown_language(mock_which, mock_client, catalog_file, tmp_path, capsys):
    """Bad --lang stops the run before any description is requested."""
    with pytest.raises(SystemExit) as exc_info:
        with patch("sys.argv", ["painting-narrator", "run", "--start", "1", "--end", "3",
                                "--catalog", str(catalog_file), "--lang", "xx"]):
            main()
    assert exc_info.value.code == 1
    assert "Error: Unsupported language: xx" in capsys.readouterr().err
    mock_client.assert_not_called()
    assert not (tmp_path / "descriptions.txt").exists()
