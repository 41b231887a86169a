"""Tool to discover outline files under a directory."""

import logging
from pathlib import Path
from typing import Optional

import pathspec

from ..security import get_root, is_sensitive_filename, resolve_within_root, validate_path_traversal

logger = logging.getLogger(__name__)

# Directories to skip during crawling
SKIP_DIRS = {
    '.git',
    'node_modules',
    '__pycache__',
    '.venv',
    'venv',
    'dist',
    'build',
    '.idea',
    '.vscode',
    '.pytest_cache',
    '.mypy_cache',
    '.tox',
    'ltximg',
}

ORG_EXTENSIONS = ('.org',)


def is_hidden_path(path: Path) -> bool:
    """Check if any component of the path is hidden (starts with .)."""
    return any(part.startswith('.') for part in path.parts)


def _load_gitignore_spec(base_path: Path) -> Optional[pathspec.PathSpec]:
    """Load .gitignore patterns from the base path if present."""
    gitignore_path = base_path / '.gitignore'
    if not gitignore_path.exists():
        return None
    try:
        with open(gitignore_path, 'r', encoding='utf-8') as f:
            return pathspec.PathSpec.from_lines('gitwildmatch', f)
    except OSError:
        return None


def _dirs_between(ancestor: Path, path: Path) -> list[Path]:
    """Directories from just below ancestor down to path, inclusive."""
    dirs: list[Path] = []
    current = path
    while current != ancestor:
        dirs.append(current)
        current = current.parent
    return list(reversed(dirs))


def discover_org_files(
    base_path: str,
    max_depth: int = 5,
    include_hidden: bool = False,
    follow_symlinks: bool = False,
    extra_ignore_patterns: Optional[list[str]] = None,
    ignore_root: Optional[str] = None,
) -> list[str]:
    """
    Discover all outline files in a local directory.

    Args:
        base_path: Root directory to start crawling from
        max_depth: Maximum directory depth to crawl
        include_hidden: Whether to include hidden directories (starting with .)
        follow_symlinks: Whether to follow symbolic links (default False for safety)
        extra_ignore_patterns: Additional gitignore-style patterns to exclude
        ignore_root: Directory whose .gitignore applies and against which
            ignore patterns are matched; defaults to base_path

    Returns:
        Sorted list of paths relative to base_path
    """
    base = Path(base_path).resolve()
    if not base.exists():
        raise ValueError(f"Path does not exist: {base_path}")
    if not base.is_dir():
        raise ValueError(f"Path is not a directory: {base_path}")

    ignore_base = Path(ignore_root).resolve() if ignore_root else base
    if not validate_path_traversal(base, ignore_base):
        raise ValueError(f"Path is not inside {ignore_root}: {base_path}")

    org_files: list[str] = []
    gitignore_spec = _load_gitignore_spec(ignore_base)
    extra_spec = None
    if extra_ignore_patterns:
        extra_spec = pathspec.PathSpec.from_lines('gitwildmatch', extra_ignore_patterns)

    def is_ignored(path: Path, is_dir: bool = False) -> bool:
        rel_path = path.relative_to(ignore_base).as_posix() + ("/" if is_dir else "")
        if gitignore_spec and gitignore_spec.match_file(rel_path):
            return True
        return bool(extra_spec and extra_spec.match_file(rel_path))

    def should_skip_dir(dir_path: Path) -> bool:
        if dir_path.name in SKIP_DIRS:
            return True
        return not include_hidden and is_hidden_path(dir_path.relative_to(base))

    def crawl(current_path: Path, current_depth: int) -> None:
        if current_depth > max_depth:
            return

        try:
            entries = list(current_path.iterdir())
        except OSError:
            return

        for item in entries:
            try:
                resolved = item.resolve()
                if item.is_symlink():
                    if not follow_symlinks:
                        logger.debug("Skipping symlink: %s", item)
                        continue
                    if not validate_path_traversal(resolved, base):
                        logger.warning("Symlink escapes base directory, skipping: %s -> %s", item, resolved)
                        continue

                if item.is_file():
                    if item.suffix.lower() not in ORG_EXTENSIONS:
                        continue
                    rel_path = item.relative_to(base).as_posix()
                    if is_sensitive_filename(rel_path):
                        logger.info("Skipping sensitive file: %s", rel_path)
                        continue
                    if is_ignored(item):
                        logger.debug("Skipping ignored file: %s", rel_path)
                        continue
                    org_files.append(rel_path)

                elif item.is_dir() and not should_skip_dir(item):
                    if not is_ignored(item, is_dir=True):
                        crawl(item, current_depth + 1)

            except OSError:
                continue

    # A listed directory under an ignored one is ignored as a whole
    if any(is_ignored(parent, is_dir=True) for parent in _dirs_between(ignore_base, base)):
        return []

    crawl(base, 0)
    org_files.sort()
    return org_files


def list_org_files(
    path: str = ".",
    max_depth: int = 5,
    include_hidden: bool = False,
    follow_symlinks: bool = False,
    extra_ignore_patterns: Optional[list[str]] = None,
    root: Optional[str] = None,
) -> dict:
    """
    List outline files below a directory inside the allowed root.

    Returns:
        Dict with the directory (relative to root) and the files found
    """
    base = get_root(root)
    directory = resolve_within_root(path, base)
    if directory is None:
        return {"error": f"Path is outside the allowed root: {path}"}

    try:
        files = discover_org_files(
            str(directory),
            max_depth=max_depth,
            include_hidden=include_hidden,
            follow_symlinks=follow_symlinks,
            extra_ignore_patterns=extra_ignore_patterns,
            ignore_root=str(base),
        )
    except ValueError as e:
        return {"error": str(e)}

    rel_dir = directory.relative_to(base).as_posix()
    prefix = "" if rel_dir == "." else rel_dir + "/"
    return {
        "path": rel_dir,
        "count": len(files),
        "files": [prefix + f for f in files],
    }
