import cProfile
import logging
from contextlib import contextmanager
from typing import Optional

log = logging.getLogger(__name__)


@contextmanager
def profiled(path: Optional[str]):
    """Profiles the enclosed block and dumps the stats to path. Does nothing when path is None."""
    if path is None:
        yield None
        return

    profiler = cProfile.Profile()
    profiler.enable()
    try:
        yield profiler
    finally:
        profiler.disable()
        profiler.dump_stats(path)
        log.info("Wrote profile to %s", path)
