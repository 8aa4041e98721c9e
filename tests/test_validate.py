import pytest

from life3d.rules import MOORE_OFFSETS, Rules
from life3d.validate import digest_trace, main, validate_task_independence


def test_digest_trace_length():
    trace = digest_trace(Rules.build(4), seed=1, generations=3, tasks=2)
    assert len(trace) == 4


@pytest.mark.parametrize("offsets", [None, MOORE_OFFSETS])
def test_task_independence(offsets):
    rules = Rules.build(6, offsets=offsets)
    ok, report = validate_task_independence(rules, seed=3, generations=5, tasks_list=[1, 4, 9, 100])
    assert ok
    assert report["first_mismatch"] == {"1": None, "4": None, "9": None, "100": None}


def test_main_reports_ok(capsys):
    main(["--dims", "4", "--generations", "3", "--tasks", "1", "8"])
    assert "task-count independence OK" in capsys.readouterr().out
