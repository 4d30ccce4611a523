"""JSON and plain-text summaries of a traced knot."""

from __future__ import annotations
import json
from collections import Counter
from pathlib import Path

import numpy as np

from celtic_knots.knot.models import Art, Stroke, ThreadTrace


class _NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        return super().default(obj)


def _thread_summary(index: int, trace: ThreadTrace) -> dict:
    return {
        "thread_id": index,
        "num_samples": len(trace),
        "num_crossings": trace.crossing_count,
        "over_samples": sum(trace.over),
        "under_samples": len(trace.over) - sum(trace.over),
        "positions": np.array([p.to_array() for p in trace.positions]),
        "over": list(trace.over),
        "types": [t.value for t in trace.types],
    }


def knot_summary(art: Art, strokes: list[Stroke] | None = None) -> dict:
    """Counts describing *art* (and the stroke list it came from, if given)."""
    data = {
        "summary": {
            "num_threads": art.thread_count(),
            "num_samples": sum(len(t) for t in art.traces),
            "num_crossing_samples": sum(t.crossing_count for t in art.traces),
        },
        "threads": [_thread_summary(i, t) for i, t in enumerate(art.traces)],
    }
    if strokes is not None:
        types = Counter(s.type.value for s in strokes)
        data["strokes"] = {
            "num_strokes": len(strokes),
            "types": dict(sorted(types.items())),
        }
    return data


def write_json(
    art: Art,
    output_path: str | Path,
    strokes: list[Stroke] | None = None,
    verbose: bool = False,
) -> Path:
    """Write a machine-readable description of the knot as JSON."""
    output_path = Path(output_path)
    data = knot_summary(art, strokes)
    output_path.write_text(
        json.dumps(data, indent=2, cls=_NumpyEncoder), encoding="utf-8"
    )
    if verbose:
        print(f"  JSON written → {output_path}")
    return output_path


def write_txt(
    art: Art,
    output_path: str | Path,
    strokes: list[Stroke] | None = None,
    verbose: bool = False,
) -> Path:
    """Write a human-readable description of the knot as plain text."""
    output_path = Path(output_path)
    data = knot_summary(art, strokes)
    summary = data["summary"]

    lines: list[str] = []
    lines.append("=" * 60)
    lines.append("CELTIC KNOT")
    lines.append("=" * 60)
    if strokes is not None:
        lines.append(f"Strokes    : {data['strokes']['num_strokes']}")
        for name, count in data["strokes"]["types"].items():
            lines.append(f"  {name:<8} : {count}")
    lines.append(f"Threads    : {summary['num_threads']}")
    lines.append(f"Samples    : {summary['num_samples']}")
    lines.append(f"Crossings  : {summary['num_crossing_samples']}")
    lines.append("")

    lines.append("THREAD DETAILS")
    lines.append("-" * 40)
    for t in data["threads"]:
        lines.append(
            f"Thread {t['thread_id']:4d}  samples={t['num_samples']}  "
            f"crossings={t['num_crossings']}  "
            f"over={t['over_samples']}  under={t['under_samples']}"
        )

    output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if verbose:
        print(f"  TXT written → {output_path}")
    return output_path
