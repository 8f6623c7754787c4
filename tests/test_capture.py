"""Unit tests for raw stack frame capture."""

from __future__ import annotations

import sys
from types import CodeType

from pipelog.stack.capture import Frame, RawFrame, capture_frames, capture_raw_frames, describe


class Sampler:
    def grab(self):
        return capture_frames(), sys._getframe().f_lineno

    @classmethod
    def grab_from_class(cls):
        return capture_frames()


def _grab(limit=None):
    return capture_frames(limit), sys._getframe().f_lineno


def test_capture_frames_starts_at_the_calling_function():
    frames, line = _grab()
    assert frames[0].function_name == "_grab"
    assert frames[0].line == line
    assert frames[0].file_name.endswith("test_capture.py")
    assert frames[1].function_name == "test_capture_frames_starts_at_the_calling_function"


def test_plain_functions_have_no_method_or_type_name():
    frames, _ = _grab()
    assert frames[0].method_name is None
    assert frames[0].type_name is None


def test_methods_report_method_and_type_names():
    frames, line = Sampler().grab()
    assert frames[0].method_name == "grab"
    assert frames[0].type_name == "Sampler"
    assert frames[0].line == line


def test_classmethods_report_the_class_name():
    frames = Sampler.grab_from_class()
    assert frames[0].method_name == "grab_from_class"
    assert frames[0].type_name == "Sampler"


def test_limit_bounds_the_number_of_frames():
    frames, _ = _grab(limit=2)
    assert len(frames) == 2


def test_frames_are_plain_descriptors():
    frames, _ = _grab()
    assert all(isinstance(frame, Frame) for frame in frames)
    assert all(frame.line is None or frame.line >= 1 for frame in frames)


def test_column_is_one_based():
    frames, _ = _grab()
    assert frames[0].column is not None
    assert frames[0].column >= 1


def test_raw_capture_keeps_code_objects_only():
    raw = capture_raw_frames()
    assert all(isinstance(frame, RawFrame) for frame in raw)
    assert isinstance(raw[0].code, CodeType)
    assert raw[0].code.co_name == "test_raw_capture_keeps_code_objects_only"


def test_raw_capture_skip_drops_frames_above_the_caller():
    def inner():
        return capture_raw_frames(skip=1)

    assert inner()[0].code.co_name == "test_raw_capture_skip_drops_frames_above_the_caller"


def test_describe_matches_direct_capture():
    raw, line = capture_raw_frames(limit=1), sys._getframe().f_lineno
    frame = describe(raw[0])
    assert frame.function_name == "test_describe_matches_direct_capture"
    assert frame.line == line
    assert frame.method_name is None


def test_nested_classes_report_their_own_name():
    def factory():
        class Local:
            def grab(self):
                return capture_frames()

        return Local()

    frames = factory().grab()
    assert frames[0].method_name == "grab"
    assert frames[0].type_name == "Local"
