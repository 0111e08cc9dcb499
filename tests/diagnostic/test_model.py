# topmark:header:start
#
#   project      : webext-typings
#   file         : test_model.py
#   file_relpath : tests/diagnostic/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the diagnostics collection."""

from __future__ import annotations

from webext_typings.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    diagnostics_counts_to_dict,
)


def test_log_counts_by_level() -> None:
    """It should count diagnostics per level and keep insertion order."""
    log = DiagnosticLog()
    log.add_warning("w1", namespace="tabs")
    log.add_error("e1")
    log.add_info("i1")
    log.add_warning("w2")

    stats = log.stats()
    assert (stats.n_info, stats.n_warning, stats.n_error, stats.total) == (1, 2, 1, 4)
    assert [d.message for d in log] == ["w1", "e1", "i1", "w2"]
    assert log.to_dict() == {"info": 1, "warning": 2, "error": 1}
    assert log.has_error()
    assert log.has_warning()


def test_empty_log() -> None:
    """It should report no problems when nothing was recorded."""
    log = DiagnosticLog()
    assert len(log) == 0
    assert not log.has_error()
    assert not log.has_warning()
    assert diagnostics_counts_to_dict(log) == {"info": 0, "warning": 0, "error": 0}


def test_frozen_snapshot_is_detached() -> None:
    """It should not see diagnostics added after the snapshot was taken."""
    log = DiagnosticLog()
    log.add_error("before")
    frozen = log.freeze()
    log.add_error("after")

    assert [d.message for d in frozen] == ["before"]
    assert frozen.has_error()
    assert frozen.stats().n_error == 1


def test_string_form_names_the_namespace() -> None:
    """It should prefix the message with its level and namespace."""
    assert str(Diagnostic(DiagnosticLevel.WARNING, "odd", "tabs")) == "[warning] tabs: odd"
    assert str(Diagnostic(DiagnosticLevel.ERROR, "bad")) == "[error] bad"
