import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

VALID_BACKENDS = ("memory", "supabase", "firestore", "rest")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    """Central configuration for the journal service."""

    def __init__(self) -> None:
        self.JOURNAL_BACKEND = os.getenv('JOURNAL_BACKEND', 'memory').strip().lower()

        self.SUPABASE_URL = os.getenv('SUPABASE_URL')
        self.SUPABASE_KEY = os.getenv('SUPABASE_KEY')
        self.SUPABASE_ENTRIES_TABLE = os.getenv('SUPABASE_ENTRIES_TABLE', 'journal_entries')

        self.FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
        self.FIRESTORE_COLLECTION = os.getenv('FIRESTORE_COLLECTION', 'entries')

        self.ENTRIES_API_URL = os.getenv('ENTRIES_API_URL')

        self.BACKEND_TIMEOUT_SECONDS = _env_float('BACKEND_TIMEOUT_SECONDS', 10.0)

        self.ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')
        self.CLAUDE_MODEL_PRIMARY = os.getenv('CLAUDE_MODEL_PRIMARY') or os.getenv(
            'CLAUDE_MODEL', 'claude-sonnet-4-5-20250929'
        )
        self.CLAUDE_MODEL_FALLBACKS = [
            model.strip()
            for model in os.getenv('CLAUDE_MODEL_FALLBACKS', 'claude-3-5-haiku-20241022').split(',')
            if model.strip()
        ]
        self.CLAUDE_MODEL_OPTIONS = [self.CLAUDE_MODEL_PRIMARY] + [
            m for m in self.CLAUDE_MODEL_FALLBACKS if m and m != self.CLAUDE_MODEL_PRIMARY
        ]
        self.LLM_TIMEOUT_SECONDS = _env_float('LLM_TIMEOUT_SECONDS', 30.0)

        self.AUTO_SENTIMENT = _env_bool('AUTO_SENTIMENT', True)
        self.WEEKLY_REFLECTION_WINDOW = _env_int('WEEKLY_REFLECTION_WINDOW', 7)
        self.PULSE_AGENT_ID = os.getenv('PULSE_AGENT_ID', 'pulse-agent')

        self.DISPLAY_TIMEZONE = os.getenv('DISPLAY_TIMEZONE', 'UTC')
        self.TIMESTAMP_FORMAT = os.getenv('TIMESTAMP_FORMAT', '%m/%d/%Y, %I:%M:%S %p')


settings = Config()
