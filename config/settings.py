import os
from dotenv import load_dotenv

# Load environment variables from the project root
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))


def _bool_env(name: str, default: str = "1") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value not in {"0", "false", "no"}


LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")
USE_DUMMY_LLM = _bool_env("USE_DUMMY_LLM", "false")

# Model used for session labels; overrides the host's primary model when set.
SESSION_LABELER_MODEL = os.getenv("SESSION_LABELER_MODEL")
SESSION_LABELER_TIMEOUT_SECONDS = float(os.getenv("SESSION_LABELER_TIMEOUT_SECONDS", "10"))

# Base directory for per-agent session folders (<home>/.openclaw/agents/<id>/sessions).
SESSION_LABELER_HOME = os.getenv("SESSION_LABELER_HOME") or os.path.expanduser("~")

API_AUTH_TOKEN = os.getenv("API_AUTH_TOKEN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8000"))
