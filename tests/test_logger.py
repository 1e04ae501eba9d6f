import sys
import time
import threading
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[1]
src_path = str(repo_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import mgo_utils.core.logger as logger_mod
from mgo_utils.core.logger import Logger, LogLevel, init_logger, get_logger


@pytest.fixture
def logger(tmp_path):
    return Logger(log_file="test.log", log_dir=str(tmp_path), timing=True)


def test_format_message_contains_level_and_location(logger):
    msg = logger._format_message(LogLevel.INFO, "hello", "x.py:3")
    assert msg.endswith("| INFO | x.py:3 | hello")


def test_log_writes_file_with_caller_location(logger):
    logger.info("first message")
    logger.warning("second\nmessage")
    lines = Path(logger.log_file).read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert "| INFO | test_logger.py:" in lines[0]
    assert lines[0].endswith("first message")
    assert lines[1].endswith("second message")


def test_trace_is_file_only(logger, capsys):
    logger.trace("quiet detail")
    logger.info("loud detail")
    out = capsys.readouterr().out
    assert "quiet detail" not in out
    assert "loud detail" in out
    content = Path(logger.log_file).read_text(encoding="utf-8")
    assert "| TRACE |" in content and "quiet detail" in content


def test_error_accepts_exceptions(logger):
    logger.error(ValueError("bad value"))
    assert "| ERROR |" in Path(logger.log_file).read_text(encoding="utf-8")
    assert "bad value" in Path(logger.log_file).read_text(encoding="utf-8")


def test_write_to_file_handles_oserror(monkeypatch, logger):
    def fake_open(*a, **k):
        raise OSError("no space")

    called = {}

    def fake_print(msg, *a, **k):
        called['msg'] = msg

    monkeypatch.setattr("builtins.open", fake_open)
    monkeypatch.setattr(logger.console, 'print', fake_print)

    # Should not raise
    logger._write_to_file("hello")
    assert 'Error writing to log file' in called['msg']


def test_fatal_exits_with_status_one(logger):
    with pytest.raises(SystemExit) as exc:
        logger.fatal("cannot continue")
    assert exc.value.code == 1
    assert "cannot continue" in Path(logger.log_file).read_text(encoding="utf-8")


def test_timers_disabled_are_noops(tmp_path):
    l = Logger(log_file="t.log", log_dir=str(tmp_path), timing=False)
    l.start("k")
    assert l.end_get("k") == 0.0
    assert l.end("k") == 0.0
    assert l._time_start == {}


def test_end_logs_time_line(logger):
    logger.start("job")
    time.sleep(0.01)
    elapsed = logger.end("job")
    assert elapsed >= 0.01
    content = Path(logger.log_file).read_text(encoding="utf-8")
    assert "| TIME |" in content
    assert "[job]" in content


def test_end_get_returns_elapsed(logger):
    logger.start("job")
    time.sleep(0.01)
    assert logger.end_get("job") >= 0.01
    assert "job" in logger._time_end


def test_end_without_start_warns(logger):
    assert logger.end_get("never") == 0.0
    assert logger.end("never") == 0.0
    content = Path(logger.log_file).read_text(encoding="utf-8")
    assert "Timer 'never' was never started" in content


def test_concurrent_timers_do_not_cross(logger):
    workers = 64
    barrier = threading.Barrier(workers)
    results = {}
    errors = []

    def work(i):
        key = f"worker-{i}"
        try:
            barrier.wait()
            before = time.perf_counter()
            logger.start(key)
            time.sleep(0.001 * (i % 5))
            elapsed = logger.end_get(key)
            after = time.perf_counter()
            results[key] = (elapsed, after - before, i)
        except Exception as e:  # pragma: no cover - surfaced by the assert below
            errors.append(e)

    threads = [threading.Thread(target=work, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert len(results) == workers
    assert set(logger._time_start) == set(results)
    assert set(logger._time_end) == set(results)
    for key, (elapsed, window, i) in results.items():
        assert elapsed >= 0
        # bounded by this worker's own start/end window
        assert elapsed <= window
        assert elapsed >= 0.001 * (i % 5)
        assert logger._time_end[key] - logger._time_start[key] == pytest.approx(elapsed)


def test_init_logger_is_created_once(monkeypatch, tmp_path):
    monkeypatch.setattr(logger_mod, "_instance", None)
    first = init_logger(log_file="a.log", log_dir=str(tmp_path))
    second = init_logger(log_file="b.log", log_dir=str(tmp_path))
    assert first is second
    assert get_logger() is first
    assert first.log_file.endswith("a.log")


def test_get_logger_creates_default(monkeypatch, tmp_path):
    monkeypatch.setattr(logger_mod, "_instance", None)
    monkeypatch.chdir(tmp_path)
    l = get_logger()
    assert isinstance(l, Logger)
    assert get_logger() is l
    assert (tmp_path / "logs").is_dir()
