import pstats

from xtrace_collapse.core.profiling import profiled


def _work():
    return sum(i * i for i in range(1000))


def test_disabled_without_path():
    with profiled(None) as profiler:
        _work()

    assert profiler is None


def test_profile_dumped(tmp_path):
    path = tmp_path / "self.prof"

    with profiled(str(path)) as profiler:
        _work()

    assert profiler is not None
    stats = pstats.Stats(str(path))
    assert any(func[2] == "_work" for func in stats.stats)
