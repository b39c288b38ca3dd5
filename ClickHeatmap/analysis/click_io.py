from __future__ import annotations

import csv
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from .models import ClickRecord, TaskInfo

logger = logging.getLogger(__name__)

CSV_HEADER = ["Task ID", "X", "Y", "Timestamp", "User Agent", "Session ID"]

# CSV header -> JSON key, so both export formats load back the same way
_CSV_KEYS = {
    "Task ID": "taskId",
    "X": "x",
    "Y": "y",
    "Timestamp": "timestamp",
    "User Agent": "userAgent",
    "Session ID": "sessionId",
}


def _opt(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v)
    return s if s else None


def _record_from_row(row: Dict[str, Any]) -> ClickRecord:
    return ClickRecord(
        x=float(row["x"]),
        y=float(row["y"]),
        task_id=_opt(row.get("taskId")),
        timestamp=_opt(row.get("timestamp")),
        session_id=_opt(row.get("sessionId")),
        user_agent=_opt(row.get("userAgent")),
    )


def _csv_row(header: List[str], fields: List[str]) -> Dict[str, Any]:
    """Map one CSV row to JSON-style keys.

    The original export writes user agents unquoted, so a row may carry more
    fields than the header: the first four and the last are fixed, everything
    between them is the user agent.
    """
    if [h.strip() for h in header] == CSV_HEADER:
        if len(fields) < len(CSV_HEADER):
            fields = fields + [""] * (len(CSV_HEADER) - len(fields))
        return {
            "taskId": fields[0],
            "x": fields[1],
            "y": fields[2],
            "timestamp": fields[3],
            "userAgent": ",".join(fields[4:-1]),
            "sessionId": fields[-1],
        }
    return {_CSV_KEYS.get(k.strip(), k.strip()): v for k, v in zip(header, fields)}


def load_clicks(path: str, task_id: Optional[str] = None) -> List[ClickRecord]:
    ext = os.path.splitext(path)[1].lower()
    rows: List[Dict[str, Any]] = []
    if ext == ".csv":
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            header = next(reader, None) or []
            for fields in reader:
                if fields:
                    rows.append(_csv_row(header, fields))
    elif ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a JSON list of clicks")
        rows = data
    else:
        raise ValueError(f"unsupported click file type: {ext or path}")

    out: List[ClickRecord] = []
    for i, row in enumerate(rows):
        try:
            rec = _record_from_row(row)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{path}: bad click record #{i + 1}: {e}") from e
        if task_id is not None and rec.task_id != task_id:
            continue
        out.append(rec)
    logger.info("loaded %d clicks from %s", len(out), path)
    return out


def load_tasks(path: str) -> Dict[str, TaskInfo]:
    """Read a task list (JSON) keyed by task id.

    Each entry needs an `id`; the question comes from `question`, else from the
    task `description`.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of tasks")
    out: Dict[str, TaskInfo] = {}
    for i, row in enumerate(data):
        if not isinstance(row, dict) or not row.get("id"):
            raise ValueError(f"{path}: task #{i + 1} has no id")
        tid = str(row["id"])
        out[tid] = TaskInfo(
            id=tid,
            title=str(row.get("title") or tid),
            question=str(row.get("question") or row.get("description") or ""),
            image_url=_opt(row.get("imageUrl")),
        )
    logger.info("loaded %d tasks from %s", len(out), path)
    return out


def export_clicks_csv(records: Sequence[ClickRecord], path: str) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(CSV_HEADER)
        for r in records:
            w.writerow([r.task_id or "", r.x, r.y, r.timestamp or "", r.user_agent or "", r.session_id or ""])


def export_clicks_json(records: Sequence[ClickRecord], path: str) -> None:
    data = [
        {
            "taskId": r.task_id,
            "x": r.x,
            "y": r.y,
            "timestamp": r.timestamp,
            "userAgent": r.user_agent,
            "sessionId": r.session_id,
        }
        for r in records
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def summarize(records: Sequence[ClickRecord]) -> None:
    if not records:
        print("No clicks found.")
        return
    tasks = {r.task_id for r in records if r.task_id}
    testers = {r.session_id for r in records if r.session_id}
    print(f"Clicks:  {len(records)}")
    print(f"Tasks:   {len(tasks)}")
    print(f"Testers: {len(testers)}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m ClickHeatmap.analysis.click_io <clicks.csv|clicks.json> [task-id]")
        raise SystemExit(2)
    summarize(load_clicks(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None))
