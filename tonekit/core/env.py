"""Configuration from the environment and .env files.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  TONEKIT_QUALITY       default extraction quality (low | medium | high)
  TONEKIT_MAX_COLORS    default palette size for `tonekit extract`
  TONEKIT_FIX_DISLIKED  1/true/yes/on to fix bile-zone colors by default
  TONEKIT_LOG_LEVEL     logging level name (default WARNING)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {'1', 'true', 'yes', 'on'}
_FALSY = {'0', 'false', 'no', 'off', ''}


def find_dotenv(start: Path) -> Path | None:
    """Walk up from start and return the first .env, never crossing a .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone and a file in a worktree
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; quotes stripped, comments and blank lines skipped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Load a .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f'{name} must be a boolean (1/0, true/false, yes/no, on/off), got {value!r}')


@dataclass
class Settings:
    """CLI defaults resolved from the environment."""

    quality: str = 'medium'
    max_colors: int = 5
    fix_disliked: bool = False
    log_level: str = 'WARNING'

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        env = os.environ if environ is None else environ
        settings = cls()

        quality = env.get('TONEKIT_QUALITY')
        if quality:
            quality = quality.strip().lower()
            if quality not in ('low', 'medium', 'high'):
                raise ValueError(f'TONEKIT_QUALITY must be low, medium or high, got {quality!r}')
            settings.quality = quality

        max_colors = env.get('TONEKIT_MAX_COLORS')
        if max_colors:
            try:
                settings.max_colors = int(max_colors)
            except ValueError:
                raise ValueError(f'TONEKIT_MAX_COLORS must be an integer, got {max_colors!r}') from None
            if settings.max_colors < 1:
                raise ValueError(f'TONEKIT_MAX_COLORS must be >= 1, got {settings.max_colors}')

        fix = env.get('TONEKIT_FIX_DISLIKED')
        if fix is not None:
            settings.fix_disliked = _parse_bool('TONEKIT_FIX_DISLIKED', fix)

        level = env.get('TONEKIT_LOG_LEVEL')
        if level:
            settings.log_level = level.strip().upper()

        return settings
