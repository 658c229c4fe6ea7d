"""Lightweight in-process metrics for collaborator calls.

Counters and latency aggregates keyed by (op, service) until a real metrics
backend is wired. Relies on the GIL for thread safety.
"""
from __future__ import annotations
from typing import Dict, Tuple

_counter: Dict[Tuple[str, str], int] = {}
_errors: Dict[Tuple[str, str], int] = {}
_latency: Dict[Tuple[str, str], Dict[str, float]] = {}


def inc(op: str, service: str, error: bool = False):
    key = (op, service)
    _counter[key] = _counter.get(key, 0) + 1
    if error:
        _errors[key] = _errors.get(key, 0) + 1


def observe(op: str, service: str, ms: float):  # min/max/count/total
    key = (op, service)
    bucket = _latency.setdefault(key, {"count": 0, "total": 0.0, "min": ms, "max": ms})
    bucket["count"] += 1
    bucket["total"] += ms
    if ms < bucket["min"]:
        bucket["min"] = ms
    if ms > bucket["max"]:
        bucket["max"] = ms


def snapshot():
    out = []
    for (op, service), c in _counter.items():
        row = {"op": op, "service": service, "count": c, "errors": _errors.get((op, service), 0)}
        lat = _latency.get((op, service))
        if lat and lat["count"]:
            row.update({
                "lat_min_ms": round(lat["min"], 2),
                "lat_max_ms": round(lat["max"], 2),
                "lat_avg_ms": round(lat["total"] / lat["count"], 2),
            })
        out.append(row)
    return sorted(out, key=lambda r: (r["op"], r["service"]))


def reset():
    """Test helper: drop all collected values."""
    _counter.clear()
    _errors.clear()
    _latency.clear()


__all__ = ["inc", "observe", "snapshot", "reset"]
