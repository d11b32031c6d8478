"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_GATEWAY_BASE_URL = "https://ai-gateway.vercel.sh/v1"
DEFAULT_EMBED_MODEL = "openai/text-embedding-3-small"
DEFAULT_MAX_EMBED_CHARS = 8000
DEFAULT_TOP_K = 10
DEFAULT_LIBRARY_PATH = "library.json"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LibrarySettings:
    """Runtime settings for storage, embeddings and search.

    Env vars:
      - PAPER_LIBRARY_PATH: JSON file holding the library
      - AI_GATEWAY_BASE_URL / AI_GATEWAY_API_KEY: embedding gateway access
      - PAPER_LIBRARY_EMBED_MODEL: embedding model name
      - PAPER_LIBRARY_MAX_EMBED_CHARS: text clamp applied before embedding
      - PAPER_LIBRARY_TOP_K: default number of search results
      - PAPER_LIBRARY_LOG_LEVEL: DEBUG/INFO/WARNING/ERROR
      - PAPER_LIBRARY_LOG_FILE: optional log file path
    """

    library_path: Path = Path(DEFAULT_LIBRARY_PATH)
    gateway_base_url: str = DEFAULT_GATEWAY_BASE_URL
    gateway_api_key: Optional[str] = None
    embed_model: str = DEFAULT_EMBED_MODEL
    max_embed_chars: int = DEFAULT_MAX_EMBED_CHARS
    default_top_k: int = DEFAULT_TOP_K
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_embed_chars <= 0:
            raise ValueError("max_embed_chars must be > 0")
        if self.default_top_k <= 0:
            raise ValueError("default_top_k must be > 0")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        dotenv: bool = True,
    ) -> "LibrarySettings":
        """Build settings from environment variables (after loading `.env`)."""

        if dotenv and environ is None:
            load_dotenv()
        env = os.environ if environ is None else environ

        return cls(
            library_path=Path(env.get("PAPER_LIBRARY_PATH", DEFAULT_LIBRARY_PATH)),
            gateway_base_url=env.get("AI_GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL).strip(),
            gateway_api_key=(env.get("AI_GATEWAY_API_KEY") or "").strip() or None,
            embed_model=env.get("PAPER_LIBRARY_EMBED_MODEL", DEFAULT_EMBED_MODEL).strip(),
            max_embed_chars=_int_env(env, "PAPER_LIBRARY_MAX_EMBED_CHARS", DEFAULT_MAX_EMBED_CHARS),
            default_top_k=_int_env(env, "PAPER_LIBRARY_TOP_K", DEFAULT_TOP_K),
            log_level=env.get("PAPER_LIBRARY_LOG_LEVEL", "INFO").strip().upper(),
            log_file=env.get("PAPER_LIBRARY_LOG_FILE") or None,
        )


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Attach handlers to the `paper_library` logger and return it.

    Calling it again does not add duplicate handlers.
    """

    logger = logging.getLogger("paper_library")
    resolved_level = (level or os.getenv("PAPER_LIBRARY_LOG_LEVEL", "INFO")).upper()
    logger.setLevel(resolved_level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    file_path = log_file or os.getenv("PAPER_LIBRARY_LOG_FILE")
    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
