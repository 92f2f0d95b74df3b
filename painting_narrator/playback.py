"""Best-effort playback through an external player."""

import logging
import shlex
import subprocess

from painting_narrator.constants import DEFAULT_PLAYER, PLAYBACK_TIMEOUT

logger = logging.getLogger(__name__)


def play(path: str, player: str = DEFAULT_PLAYER, timeout: float = PLAYBACK_TIMEOUT) -> bool:
    """Play an audio file and wait for the player to exit.

    Returns True on a clean exit. Never raises: a missing player, a bad exit
    status or a timeout is logged and reported as False.
    """
    try:
        cmd = shlex.split(player) + [path]
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError:
        logger.warning("Error playing sound: player not found: %s", player)
        return False
    except subprocess.TimeoutExpired:
        logger.warning("Error playing sound: %s still running after %ss", player, timeout)
        return False
    except (OSError, ValueError) as e:
        logger.warning("Error playing sound: %s", e)
        return False

    if result.returncode != 0:
        logger.warning("Error playing sound: %s exited with status %d: %s",
                       cmd[0], result.returncode, (result.stderr or "").strip())
        return False
    return True
