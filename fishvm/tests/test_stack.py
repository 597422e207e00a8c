import pytest

from fishvm.errors import EmptyStack
from fishvm.stack import Stack


def test_push_pop_order():
    stack = Stack([1, 2])
    stack.push(3)
    assert stack.pop() == 3
    assert stack.pop() == 2
    assert stack.values() == [1.0]


def test_values_are_floats():
    stack = Stack([1, 2])
    stack.push(7)
    assert all(isinstance(v, float) for v in stack.values())


def test_pop_empty_raises():
    with pytest.raises(EmptyStack):
        Stack().pop()


def test_register_round_trip_restores_stack():
    stack = Stack([5])
    stack.register_toggle()
    assert stack.values() == []
    assert stack.register == 5
    stack.register_toggle()
    assert stack.values() == [5]
    assert not stack.has_register


def test_register_toggle_on_empty_stack_faults():
    with pytest.raises(EmptyStack):
        Stack().register_toggle()


def test_duplicate_top():
    stack = Stack([1, 2])
    stack.duplicate_top()
    assert stack.values() == [1, 2, 2]
    with pytest.raises(EmptyStack):
        Stack().duplicate_top()


def test_swap_top_two():
    stack = Stack([1, 2, 3])
    stack.swap_top_two()
    assert stack.values() == [1, 3, 2]


def test_swap_needs_two_values():
    stack = Stack([1])
    with pytest.raises(EmptyStack):
        stack.swap_top_two()
    assert stack.values() == [1]


def test_rotate_top_three():
    stack = Stack([1, 2, 3, 4])
    stack.rotate_top_three()
    assert stack.values() == [1, 3, 4, 2]


def test_rotate_needs_three_values():
    stack = Stack([1, 2])
    with pytest.raises(EmptyStack):
        stack.rotate_top_three()
    assert stack.values() == [1, 2]


def test_shift_right_and_left():
    stack = Stack([1, 2, 3, 4])
    stack.shift_right()
    assert stack.values() == [4, 1, 2, 3]

    stack = Stack([1, 2, 3, 4])
    stack.shift_left()
    assert stack.values() == [2, 3, 4, 1]


@pytest.mark.parametrize("method", ["shift_right", "shift_left"])
def test_shift_on_empty_stack_faults(method):
    with pytest.raises(EmptyStack):
        getattr(Stack(), method)()


def test_reverse_in_place():
    stack = Stack([1, 2, 3])
    stack.reverse()
    assert stack.values() == [3, 2, 1]
    Stack().reverse()  # empty reverse is fine


def test_replace_clears_register():
    stack = Stack([9])
    stack.register_toggle()
    stack.replace([1.0, 2.0])
    assert stack.values() == [1, 2]
    assert stack.register is None
