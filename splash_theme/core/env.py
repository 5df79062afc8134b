"""Environment variable loading for splash-theme.

Load order (first wins):
  1. Existing OS environment variables — never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file found by walking up from cwd, stopping at .git (file or dir).

Only SPLASH_* keys are imported. The build never needs credentials, so any
other keys in a shared .env (API keys for embed widgets etc.) are left alone.
"""

import os
from pathlib import Path

ENV_PREFIX = 'SPLASH_'


def find_dotenv(start: Path) -> Path | None:
    """Return the nearest .env at or above start, without crossing a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def parse_dotenv(text: str) -> dict[str, str]:
    """Parse .env text. Supports `export KEY=value`, quotes and trailing # comments."""
    values: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export ') :].lstrip()
        key, sep, value = line.partition('=')
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if value[:1] in ('"', "'") and value.endswith(value[0]) and len(value) >= 2:
            value = value[1:-1]
        elif ' #' in value:
            value = value.split(' #', 1)[0].rstrip()
        values[key] = value
    return values


def load_env(env_file: str | None = None, prefix: str = ENV_PREFIX) -> Path | None:
    """Copy prefixed keys from a .env file into os.environ where not already set.

    Returns the path that was read, or None if no .env was found.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in parse_dotenv(path.read_text(encoding='utf-8')).items():
        if key.startswith(prefix):
            os.environ.setdefault(key, value)
    return path
