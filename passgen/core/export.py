from __future__ import annotations

import csv
import io
import os
import tempfile
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from passgen.core.error_dialect import EXPORT_WRITE_FAILED, INVALID_EXPORT, make_error

INDEX_HEADER = "Index"
DEFAULT_VALUE_HEADER = "Password"


def to_delimited_text(values: Iterable[str], value_header: str = DEFAULT_VALUE_HEADER) -> str:
    """Render ``values`` as two-column CSV: 1-based index, always-quoted value."""
    buf = io.StringIO()
    buf.write(f"{INDEX_HEADER},{value_header}\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for idx, value in enumerate(values, start=1):
        writer.writerow((idx, value))
    return buf.getvalue().rstrip("\n")


def parse_delimited_text(text: str) -> Tuple[str, ...]:
    reader = csv.reader(io.StringIO(text), strict=True)
    try:
        header = next(reader)
    except StopIteration:
        raise make_error(INVALID_EXPORT, "delimited text is empty") from None
    except csv.Error as exc:
        raise make_error(INVALID_EXPORT, f"malformed delimited text: {exc}") from exc
    if len(header) != 2 or header[0] != INDEX_HEADER:
        raise make_error(INVALID_EXPORT, f"unexpected header: {header!r}")

    values: list[str] = []
    try:
        for expected, row in enumerate(reader, start=1):
            if len(row) != 2:
                raise make_error(INVALID_EXPORT, f"row {expected} must have 2 columns, got {len(row)}")
            if row[0].strip() != str(expected):
                raise make_error(INVALID_EXPORT, f"row {expected} has out-of-order index {row[0]!r}")
            values.append(row[1])
    except csv.Error as exc:
        raise make_error(INVALID_EXPORT, f"malformed delimited text: {exc}") from exc
    return tuple(values)


def _enforce_private_permissions(path: Path) -> None:
    try:
        os.chmod(path, 0o600)
    except OSError as exc:
        if os.name != "nt":
            raise make_error(EXPORT_WRITE_FAILED, f"Unable to enforce private permissions on '{path}': {exc}") from exc


def write_delimited_file(path: str | Path, values: Sequence[str], value_header: str = DEFAULT_VALUE_HEADER) -> Path:
    """Atomically write the export to ``path`` with owner-only permissions."""
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = to_delimited_text(values, value_header) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.tmp-", dir=str(target.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        _enforce_private_permissions(tmp_path)
        os.replace(tmp_path, target)
    except OSError as exc:
        raise make_error(EXPORT_WRITE_FAILED, f"Unable to write export file '{target}': {exc}") from exc
    finally:
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass
    return target


__all__ = [
    "DEFAULT_VALUE_HEADER",
    "INDEX_HEADER",
    "parse_delimited_text",
    "to_delimited_text",
    "write_delimited_file",
]
