# Rev 0.1.0
"""Spreadsheet → Task import.

Columns are matched by case-sensitive aliases; the first alias holding a
non-empty value wins, otherwise the column default applies. Every imported
row yields one Task carrying a single ``imported`` system audit entry.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ganttz.models.entities import Task
from ganttz.models.types import AuditKind, Priority, Status
from ganttz.services.audit import Clock, IdFactory, make_entry, new_audit_id, utcnow
from ganttz.services.errors import ImportParseError
from ganttz.utils.logging_setup import get_logger

_log = get_logger("import")

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".csv")
_EXCEL_EPOCH = datetime(1899, 12, 30)
_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d", "%d %b %Y", "%b %d, %Y")


# ---------- value parsers ----------

def parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _EXCEL_EPOCH + timedelta(days=float(value))
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"unrecognised date {text!r}")


def parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(round(value))
    text = str(value).strip().rstrip("%").strip()
    return int(round(float(text)))


def parse_progress(value: Any) -> int:
    n = parse_int(value)
    if not 0 <= n <= 100:
        raise ValueError(f"progress {n} outside 0..100")
    return n


def parse_duration(value: Any) -> int:
    n = parse_int(value)
    if n < 0:
        raise ValueError(f"negative duration {n}")
    return n


def parse_text(value: Any) -> str:
    return str(value).strip()


def _enum_parser(cls):
    lookup = {m.value.casefold(): m for m in cls}

    def parse(value: Any):
        try:
            return lookup[str(value).strip().casefold()]
        except KeyError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"{value!r} is not one of: {allowed}") from None
    return parse


# ---------- schema ----------

@dataclass(frozen=True)
class Column:
    field: str
    aliases: Tuple[str, ...]
    parse: Callable[[Any], Any]
    default: Callable[[int, datetime], Any]

    def extract(self, row: Mapping[str, Any]) -> Tuple[Optional[str], Any]:
        """
        (alias, raw value) of the first non-empty alias, or (None, None).

        A zero is only used when no later alias holds a non-zero value, so
        ``Progress=0`` does not hide a filled-in ``% Complete``.
        """
        zero: Optional[Tuple[str, Any]] = None
        for alias in self.aliases:
            raw = row.get(alias)
            if raw is None:
                continue
            if isinstance(raw, str) and not raw.strip():
                continue
            if _is_zero(raw):
                zero = zero or (alias, raw)
                continue
            return alias, raw
        return zero or (None, None)


def _is_zero(raw: Any) -> bool:
    if isinstance(raw, bool):
        return False
    if isinstance(raw, (int, float)):
        return raw == 0
    try:
        return float(str(raw).strip().rstrip("%")) == 0
    except ValueError:
        return False


TASK_SHEET_SCHEMA: Tuple[Column, ...] = (
    Column("name", ("Task Name", "Name", "Task"), parse_text, lambda n, now: f"Task {n}"),
    Column("start_date", ("Start Date",), parse_date, lambda n, now: now),
    Column("end_date", ("End Date",), parse_date, lambda n, now: now),
    Column("duration", ("Duration",), parse_duration, lambda n, now: 1),
    Column("progress", ("Progress", "% Complete"), parse_progress, lambda n, now: 0),
    Column("assignee", ("Assignee", "Resource"), parse_text, lambda n, now: "Unassigned"),
    Column("priority", ("Priority",), _enum_parser(Priority), lambda n, now: Priority.MEDIUM),
    Column("status", ("Status",), _enum_parser(Status), lambda n, now: Status.NOT_STARTED),
)


# ---------- readers ----------

RowSource = Iterable[Tuple[int, Dict[str, Any]]]


def _is_blank(row: Mapping[str, Any]) -> bool:
    return all(v is None or (isinstance(v, str) and not v.strip()) for v in row.values())


def read_csv_rows(path: Path) -> Iterator[Tuple[int, Dict[str, Any]]]:
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            # keys are stripped of stray whitespace, not case-folded
            yield reader.line_num, {
                (k.strip() if isinstance(k, str) else k): (v.strip() if isinstance(v, str) else v)
                for k, v in row.items()
                if k is not None
            }


def read_xlsx_rows(path: Path) -> Iterator[Tuple[int, Dict[str, Any]]]:
    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return
        names = [str(h).strip() if h is not None else None for h in header]
        for offset, values in enumerate(rows, start=2):
            yield offset, {n: v for n, v in zip(names, values) if n}
    finally:
        wb.close()


def read_rows(path: Union[str, Path]) -> List[Tuple[int, Dict[str, Any]]]:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ImportParseError(path, f"unsupported file type {suffix or '(none)'}")
    if not path.is_file():
        raise ImportParseError(path, "file not found")
    try:
        if suffix == ".csv":
            return list(read_csv_rows(path))
        return list(read_xlsx_rows(path))
    except (InvalidFileException, BadZipFile, KeyError, csv.Error, UnicodeDecodeError, OSError) as exc:
        raise ImportParseError(path, f"unreadable spreadsheet: {exc}") from exc


# ---------- mapping ----------

def tasks_from_rows(
    rows: RowSource,
    *,
    source: str = "spreadsheet",
    path: Union[str, Path, None] = None,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_audit_id,
) -> List[Task]:
    now = clock()
    tasks: List[Task] = []
    for line, row in rows:
        if _is_blank(row):
            continue
        n = len(tasks) + 1
        values: Dict[str, Any] = {}
        for col in TASK_SHEET_SCHEMA:
            alias, raw = col.extract(row)
            if alias is None:
                values[col.field] = col.default(n, now)
                continue
            try:
                values[col.field] = col.parse(raw)
            except ValueError as exc:
                raise ImportParseError(path, str(exc), row=line, column=alias) from exc

        entry = make_entry(
            "imported", None, f"imported from {source}",
            kind=AuditKind.SYSTEM, reason="Initial import",
            clock=clock, id_factory=id_factory,
        )
        tasks.append(Task(id=str(n), audit_trail=(entry,), **values))
    return tasks


def import_tasks(
    path: Union[str, Path],
    *,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_audit_id,
) -> List[Task]:
    path = Path(path)
    rows = read_rows(path)
    tasks = tasks_from_rows(rows, source=path.name, path=path, clock=clock, id_factory=id_factory)
    _log.info("Imported %d task(s) from %s", len(tasks), path)
    return tasks
