import io

import pytest

from fishvm.diagnostics import FAULT_TRAILER, HIGHLIGHT_ON, render_codebox, render_stacks, report_fault
from fishvm.errors import EmptyStack
from fishvm.interpreter import Interpreter


def test_render_codebox_marks_pointer_without_colour():
    vm = Interpreter.from_source("12\n;", output=io.StringIO())
    text = render_codebox(vm.codebox, 1, 0, color=False)
    assert text.splitlines() == ["1[2]", "; "]


def test_render_codebox_highlights_with_ansi():
    vm = Interpreter.from_source("ab", output=io.StringIO())
    text = render_codebox(vm.codebox, 0, 0, color=True)
    assert text.startswith(HIGHLIGHT_ON + "a")


def test_render_stacks_lists_active_stack_first():
    vm = Interpreter.from_source("1[&;", [7, 8], output=io.StringIO())
    vm.run()
    table = render_stacks(vm.state)
    lines = table.splitlines()
    assert "depth" in lines[0]
    assert "*" in lines[2]
    assert "[]" in lines[2]
    assert "1" in lines[2] and "8" in lines[2]
    assert "[7]" in lines[3]


def test_report_fault_dumps_grid_and_stack():
    vm = Interpreter.from_source("12~~~;", output=io.StringIO())
    with pytest.raises(EmptyStack) as excinfo:
        vm.run()
    stream = io.StringIO()
    report_fault(vm, stream, color=False, detail=excinfo.value.describe())
    report = stream.getvalue()
    assert "12~~[~];" in report
    assert "Stack: []" in report
    assert "empty" in report
    assert report.rstrip().endswith(FAULT_TRAILER)
