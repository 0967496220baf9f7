import pathlib


def format_size(size_bytes: int) -> str:
    """Formats bytes as B/KB/MB/GB."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.2f} GB"
    if size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.2f} MB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.2f} KB"
    return f"{size_bytes} B"


def get_file_size(path) -> int:
    return pathlib.Path(path).stat().st_size
