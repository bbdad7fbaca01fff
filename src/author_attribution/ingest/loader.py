"""Load training and input texts."""

from pathlib import Path

from author_attribution.errors import ReadFailure


def load_text(path: Path | str) -> str:
    """
    Load a plain text file as UTF-8.

    A leading byte order mark is dropped. Any OS error or invalid UTF-8
    is reported as ReadFailure.
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ReadFailure(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise ReadFailure(path, exc.strerror or str(exc)) from exc
