"""Unit tests for record handlers."""

from __future__ import annotations

import io

import pytest

from pipelog.core.errors import MissingPipeError
from pipelog.facade.handlers import ConsoleHandler, MemoryHandler, null_handler
from pipelog.models.record import Record
from pipelog.render.renderer import FormatRenderer


def _record(level: str = "info", formats=("{{ level }} {{ args }}",)) -> Record:
    return Record("app", formats, {}, {}, level, ("hello",))


def _console(strict: bool = False) -> tuple[ConsoleHandler, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    renderer = FormatRenderer(width_source=lambda: 0)
    return ConsoleHandler(renderer, stream=out, error_stream=err, strict=strict), out, err


def test_console_handler_writes_one_line_per_format():
    handler, out, err = _console()
    handler(_record(formats=("{{ level }}", "{{ args }}")))
    assert out.getvalue() == "info\nhello\n"
    assert err.getvalue() == ""


def test_console_handler_sends_errors_to_the_error_stream():
    handler, out, err = _console()
    handler(_record("error"))
    handler(_record("critical"))
    assert out.getvalue() == ""
    assert err.getvalue() == "error hello\ncritical hello\n"


def test_console_handler_skips_failing_formats():
    handler, out, err = _console()
    handler(_record(formats=("{{ level | nope }}", "{{ level }}")))
    assert out.getvalue() == "info\n"
    assert "nope" in err.getvalue()


def test_skipped_format_is_visible_without_package_logging(capsys):
    handler = ConsoleHandler(FormatRenderer(width_source=lambda: 0))
    handler(_record(formats=("{{ level | nope }}",)))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "skipped format" in captured.err
    assert '"nope"' in captured.err


def test_strict_console_handler_raises():
    handler, _, _ = _console(strict=True)
    with pytest.raises(MissingPipeError):
        handler(_record(formats=("{{ level | nope }}",)))


def test_memory_handler_collects_records_and_outputs():
    handler = MemoryHandler(FormatRenderer(width_source=lambda: 0))
    record = _record()
    handler(record)
    assert handler.records == [record]
    assert handler.outputs == [["info hello"]]
    handler.clear()
    assert handler.records == []


def test_null_handler_ignores_records():
    assert null_handler(_record()) is None
