import io

from tilemon.core.logging import Logger


def test_threshold_and_extras():
    buf = io.StringIO()
    log = Logger("WARN", stream=buf)
    log.info("Hidden")
    log.warn("CatchAttempt", shakes=2, caught=False)
    out = buf.getvalue()
    assert "Hidden" not in out
    assert "[WARN] CatchAttempt shakes=2 caught=False" in out


def test_set_level_unknown_falls_back_to_info():
    log = Logger("ERROR", stream=io.StringIO())
    log.set_level("CHATTY")
    assert log.enabled("INFO")
    assert not log.enabled("DEBUG")
