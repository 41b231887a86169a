"""Access checks for outline files: root confinement, sensitive names, secrets."""

import fnmatch
import logging
import os
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "ORGOUTLINE_ROOT"

# Files that are never read, whatever their extension
SKIP_FILES = {
    '.env',
    '.env.local',
    '.env.production',
    'credentials.json',
    'secrets.yaml',
    'secrets.yml',
    'secrets.org',
    'passwords.org',
    'authinfo.org',
    '.authinfo',
    '.netrc',
}

SENSITIVE_PATTERNS = [
    '*.pem',
    '*.key',
    '*.p12',
    '*.gpg',
    '*.org.gpg',
    '*.age',
    'id_rsa*',
    'id_ed25519*',
]

SECRET_CONTENT_PATTERNS = [
    (re.compile(r'-----BEGIN.*PRIVATE KEY-----'), 'private key'),
    (re.compile(r'-----BEGIN PGP MESSAGE-----'), 'PGP encrypted block'),
    (re.compile(r'AKIA[0-9A-Z]{16}'), 'AWS access key'),
    (re.compile(r'sk-ant-[a-zA-Z0-9_-]+'), 'Anthropic API key'),
    (re.compile(r'ghp_[a-zA-Z0-9]{36}'), 'GitHub personal access token'),
    (re.compile(r'glpat-[a-zA-Z0-9\-_]{20,}'), 'GitLab personal access token'),
    (re.compile(r'xox[boaprs]-[a-zA-Z0-9\-]+'), 'Slack token'),
]


def get_root(root: Optional[str] = None) -> Path:
    """Return the directory tools may read from: argument, env var, or cwd."""
    configured = root or os.environ.get(ROOT_ENV_VAR) or os.getcwd()
    return Path(configured).resolve()


def is_sensitive_filename(filename: str) -> bool:
    """Check if a filename matches known sensitive file patterns."""
    basename = Path(filename).name
    if basename.lower() in {s.lower() for s in SKIP_FILES}:
        return True
    for pattern in SENSITIVE_PATTERNS:
        if fnmatch.fnmatch(basename.lower(), pattern):
            return True
    return False


def scan_content_for_secrets(content: str) -> list[str]:
    """Return descriptions of the secret kinds found in content."""
    return [description for pattern, description in SECRET_CONTENT_PATTERNS if pattern.search(content)]


def validate_path_traversal(resolved_path: Path, base_path: Path) -> bool:
    """Check that a resolved path is within the base directory (no traversal/symlink escape)."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False


def resolve_within_root(path: str, root: Path) -> Optional[Path]:
    """
    Resolve path against root and return it if it stays inside root.

    Relative paths are taken relative to root. Returns None for anything
    that resolves outside, including through symlinks.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root / candidate
    resolved = candidate.resolve()
    if not validate_path_traversal(resolved, root):
        logger.warning("Path escapes root %s, refusing: %s", root, path)
        return None
    return resolved
