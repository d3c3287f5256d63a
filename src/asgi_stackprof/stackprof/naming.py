import re
from datetime import datetime

_NON_WORD = re.compile(r"\W", re.ASCII)


def flatten_path(path: str) -> str:
    """Replace every character outside [A-Za-z0-9_] with an underscore."""
    return _NON_WORD.sub("_", path)


def artifact_filename(captured_at: datetime, pid: int, method: str, path: str, duration_ms: float) -> str:
    """Name of the dump file for one captured request.

    ex: "stackprof-20171004_175816-41860-GET_v1_users-0308ms.dump"
    """
    return f"stackprof-{captured_at:%Y%m%d_%H%M%S}-{pid}-{method}{flatten_path(path)}-{int(duration_ms):04d}ms.dump"
