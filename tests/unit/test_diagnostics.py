"""DiagnosticLog: bounded log, filtering by kind, logging."""

import logging

from app.application.services.diagnostics import DiagnosticKind, DiagnosticLog


def test_record_and_filter() -> None:
    log = DiagnosticLog()

    log.record(DiagnosticKind.TRANSPORT_FAILURE, 1, "HTTP 500", category="dns")
    log.record(DiagnosticKind.LENGTH_MISMATCH, 1, "mismatch", category="alert")

    assert log.count() == 2
    assert [d.category for d in log.entries(DiagnosticKind.LENGTH_MISMATCH)] == ["alert"]
    first = log.entries()[0].to_dict()
    assert first["kind"] == "transport_failure"
    assert first["generation"] == 1
    assert first["trace_id"] is None


def test_oldest_entries_are_dropped() -> None:
    log = DiagnosticLog(max_entries=2)

    for generation in range(1, 4):
        log.record(DiagnosticKind.TRANSPORT_FAILURE, generation, "timeout")

    assert [d.generation for d in log.entries()] == [2, 3]
    log.clear()
    assert log.count() == 0


def test_record_logs_warning(caplog) -> None:
    log = DiagnosticLog()

    with caplog.at_level(logging.WARNING, logger="app.application.services.diagnostics"):
        log.record(DiagnosticKind.LENGTH_MISMATCH, 4, "Label and data mismatch", category="dns")

    assert "length_mismatch" in caplog.text
    assert "dns" in caplog.text
