"""All magic numbers and configuration constants."""

CHUNK_CHAR_LIMIT = 200              # chars, max text per synthesis request
FETCH_CONCURRENCY = 4               # max chunk downloads in flight per painting
TTS_RETRY_COUNT = 3                 # max attempts per chunk
TTS_RETRY_BASE_DELAY = 1.0          # seconds, base delay for exponential backoff
TTS_CONNECT_TIMEOUT = 10            # seconds, synthesis service connect timeout
TTS_RECEIVE_TIMEOUT = 60            # seconds, synthesis service receive timeout
TTS_RATE = "+0%"                    # normal speech rate
TTS_SLOW_RATE = "-25%"              # speech rate when the slow flag is set
DEFAULT_LANGUAGE = "en"
LANGUAGE_VOICES = {
    "en": "en-US-AriaNeural",
    "de": "de-DE-KatjaNeural",
    "es": "es-ES-ElviraNeural",
    "fr": "fr-FR-DeniseNeural",
    "it": "it-IT-ElsaNeural",
    "nl": "nl-NL-ColetteNeural",
    "pt": "pt-PT-RaquelNeural",
}
DESCRIPTION_MODEL = "gpt-3.5-turbo"
DESCRIPTION_TIMEOUT = 60.0          # seconds, text-generation request timeout
PROMPT_TEMPLATE = 'Give me a description of "{title}" painted by {painter}.'
ASSEMBLY_TIMEOUT = 120              # seconds, ffmpeg concat timeout
PLAYBACK_TIMEOUT = 900              # seconds, player gives up after this
DEFAULT_PLAYER = "ffplay -nodisp -autoexit -loglevel error"
CATALOG_PATH = "PaintingsAll_EN.json"
AUDIO_DIR = "Audio"
LOG_PATH = "descriptions.txt"
UNKNOWN_PAINTER = "Unknown artist"
VERSION = "0.1.0"
