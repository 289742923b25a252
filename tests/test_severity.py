# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for level-to-severity classification."""

from __future__ import annotations

import pytest

from lintbridge.core.severity import Severity, classify_level, coerce_severity


@pytest.mark.parametrize("level", ["note", "help"])
def test_note_and_help_are_low(level: str) -> None:
    assert classify_level(level) is Severity.LOW


def test_warning_is_medium() -> None:
    assert classify_level("warning") is Severity.MEDIUM


def test_error_is_high() -> None:
    assert classify_level("error") is Severity.HIGH


@pytest.mark.parametrize("level", ["", "failure-note", "error: internal compiler error", "ERROR", "bogus"])
def test_unknown_levels_default_to_medium(level: str) -> None:
    assert classify_level(level) is Severity.MEDIUM


def test_severity_wire_values_and_rank() -> None:
    assert [sev.value for sev in Severity] == ["LOW", "MEDIUM", "HIGH"]
    assert Severity.LOW.rank < Severity.MEDIUM.rank < Severity.HIGH.rank


def test_coerce_severity_accepts_members_and_values() -> None:
    assert coerce_severity(Severity.HIGH) is Severity.HIGH
    assert coerce_severity("low") is Severity.LOW
    assert coerce_severity("critical") is None
    assert coerce_severity(None) is None
