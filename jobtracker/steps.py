"""
Step-based process flow for operations.

A ``steps`` block is a generator function. Each fallible sub-step is
yielded; the block resumes with the unwrapped value when the step
passes and stops with that exact failing Result when it does not:

    @steps
    def create_and_save(attributes):
        record = yield step(build_operation, attributes)
        yield step(validate_record, record)
        return save_operation.call(record)

Expected failures never raise. Only a malformed step (something that is
neither a Result nor callable) raises TypeError.
"""

import functools
import inspect
from typing import Any, Callable, Generator

from .result import Result, ResultLike, success

StepGenerator = Generator[Any, Any, Any]


def _invalid_step_message(value: Any) -> str:
    return (
        "expected parameter to be a result, an operation, or a callable, "
        f"but was {value!r}"
    )


def as_result(value: Any) -> Result:
    """Convert a Result-like value, wrapping anything else as a success."""
    if isinstance(value, ResultLike):
        return value.to_result()
    return success(value)


def extract_result(value: Any, *args, **kwargs) -> Result:
    """
    Resolve a step argument into a Result.

    Args:
        value: A Result-like object, or a callable (operation, function or
            bound method) to invoke with the remaining arguments
        *args: Positional arguments for the callable
        **kwargs: Keyword arguments for the callable

    Raises:
        TypeError: If value is neither Result-like nor callable
    """
    if isinstance(value, ResultLike):
        if args or kwargs:
            raise TypeError("arguments are only accepted when the step is callable")
        return value.to_result()

    if callable(value):
        return as_result(value(*args, **kwargs))

    raise TypeError(_invalid_step_message(value))


def step(value: Any, *args, **kwargs) -> Result:
    """Resolve a single step; yield the returned Result inside a steps block."""
    return extract_result(value, *args, **kwargs)


def run_steps(generator: StepGenerator) -> Result:
    """
    Drive a steps generator to completion.

    Returns the first failing Result yielded by the generator, or the
    generator's return value converted to a Result.
    """
    try:
        yielded = next(generator)
        while True:
            if not isinstance(yielded, ResultLike):
                generator.close()
                raise TypeError(_invalid_step_message(yielded))

            result = yielded.to_result()
            if result.failure:
                generator.close()
                return result

            yielded = generator.send(result.value)
    except StopIteration as stop:
        return as_result(stop.value)


def steps(func: Callable[..., Any]) -> Callable[..., Result]:
    """
    Decorator turning a generator function into a function returning a Result.

    Plain (non-generator) functions are also accepted; their return value
    is converted with as_result.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result:
        outcome = func(*args, **kwargs)
        if inspect.isgenerator(outcome):
            return run_steps(outcome)
        return as_result(outcome)

    return wrapper
