from typing import Dict, Any, Union
import logging
import re

_SECRET_KEY_RE = re.compile(r"(?i)(key|token|secret|authorization|apikey|api_key|password|passwd|bearer)")
_SECRET_VAL_RE = re.compile(r"(?i)^(?:sk|ghp|xox|ya29|eyJ|pk_|rk_)[A-Za-z0-9\-\._]{8,}$")
_EMAIL_RE = re.compile(r"(?i)\b([A-Z0-9._%+\-])[A-Z0-9._%+\-]*@([A-Z0-9.\-]+\.[A-Z]{2,})\b")


def mask_email(value: str) -> str:
    """'jane.doe@example.com' -> 'j***@example.com'"""
    return _EMAIL_RE.sub(lambda m: f"{m.group(1)}***@{m.group(2)}", value)


def _mask_value(v: Any) -> Any:
    if isinstance(v, str):
        if _SECRET_VAL_RE.search(v.strip()):
            return "***REDACTED***"
        if v.lower().startswith("bearer "):
            return "Bearer ***REDACTED***"
        return mask_email(v)
    return v


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if _SECRET_KEY_RE.search(str(k)):
                out[k] = "***REDACTED***"
            else:
                out[k] = _sanitize(v)
        return out
    if isinstance(obj, (list, tuple)):
        return [_sanitize(x) for x in obj]
    return _mask_value(obj)


logger = logging.getLogger('platform_monitoring')


def log_event(event: Union[str, Dict[str, Any]], payload: Dict[str, Any] | None = None, level: int = logging.INFO):
    """Log a monitoring event to the central logger.

    Accepts log_event('name', {...}) or a single dict carrying an 'event' key.
    Secrets and e-mail addresses are masked before the record is emitted.
    """
    if isinstance(event, str):
        record = {'event': event, **(payload or {})}
    else:
        record = event
    logger.log(level, 'MONITOR_EVENT %s', _sanitize(record))
