"""Application version.

Frozen builds use _BAKED_VERSION, written by the build script. From source,
the major.minor in the VERSION file at the project root is extended with the
number of commits since the last tag.
"""

import subprocess
from pathlib import Path

# Overwritten by the build script before freezing.
_BAKED_VERSION = None

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
VERSION_FILE = PROJECT_ROOT / "VERSION"


def get_version() -> str:
    """Application version string, e.g. '0.1.7'"""
    if _BAKED_VERSION is not None:
        return _BAKED_VERSION
    try:
        major_minor = VERSION_FILE.read_text(encoding='utf-8').strip() or "0.0"
    except FileNotFoundError:
        major_minor = "0.0"
    return f"{major_minor}.{_commits_since_tag()}"


def _commits_since_tag() -> int:
    """Commit count from `git describe`, 0 outside a tagged checkout"""
    try:
        result = subprocess.run(
            ['git', 'describe', '--tags', '--long'],
            capture_output=True, text=True, check=False, cwd=str(PROJECT_ROOT),
        )
    except OSError:
        return 0
    # v0.1-7-gabcdef
    parts = result.stdout.strip().rsplit('-', 2)
    if result.returncode != 0 or len(parts) != 3 or not parts[1].isdigit():
        return 0
    return int(parts[1])


if __name__ == '__main__':
    print(get_version())
