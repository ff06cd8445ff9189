"""Path resolution utilities for npcforge.

Option files referenced from a blueprint file are resolved relative to that
blueprint file, so the same blueprints work regardless of the current
working directory.
"""

from pathlib import Path


def resolve_relative_to(path: str | Path, base_file: Path) -> Path:
    """
    Resolve a path relative to a base file's directory.

    If path is absolute, returns it unchanged.
    If path is relative, resolves it against base_file's parent directory.

    Args:
        path: Path string or Path object to resolve
        base_file: The file that contains the path reference (e.g., blueprints.yaml)

    Returns:
        Resolved absolute Path

    Example:
        >>> resolve_relative_to("names.txt", Path("/campaign/blueprints.yaml"))
        PosixPath('/campaign/names.txt')

        >>> resolve_relative_to("/abs/lists/names.txt", Path("/campaign/blueprints.yaml"))
        PosixPath('/abs/lists/names.txt')
    """
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return (base_file.parent / path).resolve()


def display_path(path: str | Path, base_dir: Path | None = None) -> str:
    """Render a path relative to base_dir (default: cwd) when possible."""
    path = Path(path).resolve()
    base = (base_dir or Path.cwd()).resolve()
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)
