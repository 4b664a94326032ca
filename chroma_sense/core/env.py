"""Configuration from the environment and .env files.

Load order (first wins):
  1. Existing OS environment variables: never overwritten.
  2. The .env file given with --env-file.
  3. The nearest .env walking up from cwd. The walk stops at a .git entry
     (dir for a clone, file for a worktree) so nothing outside the repo is read.

Settings are CHROMA_SENSE_* variables:
  CHROMA_SENSE_RESAMPLE  resize filter: nearest, bilinear (default), bicubic, lanczos
  CHROMA_SENSE_JOBS      worker threads for multi-image runs
"""

import os
from pathlib import Path

from chroma_sense.core.errors import ConfigError

PREFIX = 'CHROMA_SENSE_'


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, or None at a .git boundary / filesystem root."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def _parse_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith('#') or '=' not in line:
        return None
    if line.startswith('export '):
        line = line[len('export ') :]
    key, _, raw = line.partition('=')
    key = key.strip()
    if not key:
        return None
    raw = raw.strip()
    if raw[:1] in ('"', "'"):
        quote = raw[0]
        end = raw.find(quote, 1)
        value = raw[1:end] if end != -1 else raw[1:]
    else:
        # unquoted values may carry a trailing ` # comment`
        value = raw.split(' #', 1)[0].strip()
    return key, value


def _parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value pairs from a .env file; comments, blanks and junk lines are skipped."""
    pairs = (_parse_line(line) for line in path.read_text(encoding='utf-8').splitlines())
    return dict(p for p in pairs if p is not None)


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys not already set.

    Returns the file that was loaded, or None.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def get_setting(name: str, default: str | None = None) -> str | None:
    """Value of CHROMA_SENSE_<name>; empty strings count as unset."""
    value = os.environ.get(PREFIX + name.upper(), '').strip()
    return value or default


def get_int_setting(name: str, default: int | None = None) -> int | None:
    value = get_setting(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f'{PREFIX}{name.upper()} must be an integer, got {value!r}') from None
