import time
import traceback
from functools import wraps
from typing import List, Dict, Any, Callable, Optional, Type

_registered: List[Dict[str, Any]] = []

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'
SUMMARY_FACE = '☆*:.｡.o(≧▽≦)o.｡.:*☆'


class _c:
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class TestAssertionError(AssertionError):
    """an assert_that failure, told apart from unexpected exceptions in the report."""


# --- public api ---

def test(description: str) -> Callable:
    """register a function as a test case; pytest still sees the plain function."""

    def decorator(func: Callable) -> Callable:
        _registered.append({'func': func, 'description': description})

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_equal(actual: Any, expected: Any, message: str = "values differ") -> None:
    """assert_that with both values in the failure message."""
    if actual != expected:
        raise TestAssertionError(f"{message}: expected {expected!r}, got {actual!r}")


def assert_raises(expected: Type[BaseException], func: Callable, *args, **kwargs) -> BaseException:
    """call func and require it to raise `expected`; the caught error is returned for inspection."""
    try:
        func(*args, **kwargs)
    except expected as error:
        return error
    raise TestAssertionError(f"expected {expected.__name__} to be raised")


def run(title: str = "test run", verbose_errors: bool = False) -> bool:
    """run every registered test, print a report and return whether all passed."""
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    started = time.perf_counter()

    outcomes = [_run_one(entry, verbose_errors) for entry in _registered]
    _print_summary(outcomes, started)

    # forget the tests so several suites can run from one script
    _registered.clear()
    return all(outcome['passed'] for outcome in outcomes)


def _run_one(entry: Dict[str, Any], verbose_errors: bool) -> Dict[str, Any]:
    error: Optional[str] = None
    try:
        entry['func']()
    except TestAssertionError as e:
        error = f"assertion failed: {e}"
    except Exception as e:
        error = f"{type(e).__name__}: {e}"
        if verbose_errors:
            traceback.print_exc()

    if error is None:
        print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_FACE}  {entry['description']}")
    else:
        print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_FACE}  {entry['description']}")
        print(f"    {_c.grey}└─> {error}{_c.reset}")
    return {'passed': error is None, 'description': entry['description'], 'error': error}


def _print_summary(outcomes: List[Dict[str, Any]], started: float) -> None:
    duration = (time.perf_counter() - started) * 1000
    failed = sum(1 for outcome in outcomes if not outcome['passed'])
    color = _c.ok if failed == 0 else _c.fail

    print(f"\n{color}--- summary ---{_c.reset}")
    print(f"  {SUMMARY_FACE}  ran {_c.info}{len(outcomes)}{_c.reset} tests in {_c.warn}{duration:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {len(outcomes) - failed}{_c.reset}, {_c.fail}failed: {failed}{_c.reset}")
