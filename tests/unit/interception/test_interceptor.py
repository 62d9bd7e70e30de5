"""
Unit tests for the call interceptor
"""

import logging

import pytest

from commonlogger.interception.events import CallEvent
from commonlogger.interception.interceptor import CallInterceptor, root_cause
from commonlogger.interception.scope import ScopeConfig


def find_event(result="JOHN", arguments=("john",)):
    return CallEvent(
        target_type="com.app.service.UserService",
        method_name="find",
        arguments=arguments,
        proceed=lambda: result,
    )


def failing_event(exc, arguments=("x",)):
    def proceed():
        raise exc

    return CallEvent("com.app.service.UserService", "find", arguments, proceed)


def test_startup_message_with_base_package(make_logger, lines):
    logger = make_logger()
    CallInterceptor(ScopeConfig.of("com.app"), logger=logger)
    assert lines(logger.info) == ["Logging will apply to base package: com.app"]


def test_startup_warning_without_base_package(make_logger, lines):
    logger = make_logger()
    CallInterceptor(ScopeConfig(), logger=logger)
    assert lines(logger.warning) == [
        "No base package provided. Defaulting to log all observed components."
    ]


def test_info_logs_summary_only(make_logger, lines):
    logger = make_logger(logging.INFO)
    interceptor = CallInterceptor(logger=logger)

    assert interceptor.intercept(find_event()) == "JOHN"
    assert lines(logger.info) == [
        "Executing: com.app.service.UserService.find() with args summary: arg0=john"
    ]
    logger.debug.assert_not_called()


def test_debug_logs_enter_and_exit(make_logger, lines):
    logger = make_logger(logging.DEBUG)
    interceptor = CallInterceptor(logger=logger)

    interceptor.intercept(find_event())
    assert lines(logger.debug) == [
        "Enter: com.app.service.UserService.find() with full arguments: ['john']",
        "Exit: com.app.service.UserService.find() with result: JOHN",
    ]


def test_debug_exit_with_none_result(make_logger, lines):
    logger = make_logger(logging.DEBUG)
    interceptor = CallInterceptor(logger=logger)

    interceptor.intercept(find_event(result=None, arguments=()))
    assert "with args summary: no arguments" in lines(logger.info)[0]
    assert lines(logger.debug)[-1].endswith("with result: null")


def test_warning_level_logs_nothing_on_success(make_logger):
    logger = make_logger(logging.WARNING)
    interceptor = CallInterceptor(ScopeConfig.of("com.app"), logger=logger)
    logger.reset_mock()

    assert interceptor.intercept(find_event()) == "JOHN"
    logger.info.assert_not_called()
    logger.debug.assert_not_called()


def test_out_of_scope_proceeds_without_logging(make_logger):
    logger = make_logger(logging.DEBUG)
    interceptor = CallInterceptor(ScopeConfig.of("org.other"), logger=logger)
    logger.reset_mock()

    assert interceptor.intercept(find_event()) == "JOHN"
    logger.info.assert_not_called()
    logger.debug.assert_not_called()
    logger.error.assert_not_called()


def test_proceed_runs_once(make_logger):
    calls = []
    interceptor = CallInterceptor(logger=make_logger(logging.DEBUG))
    event = CallEvent("com.app.Svc", "run", (), lambda: calls.append(1))

    interceptor.intercept(event)
    assert calls == [1]


def test_invalid_argument_failure(make_logger, lines):
    logger = make_logger(logging.INFO)
    interceptor = CallInterceptor(logger=logger)
    error = ValueError("bad")

    with pytest.raises(ValueError) as raised:
        interceptor.intercept(failing_event(error))

    assert raised.value is error
    assert lines(logger.error) == [
        "Illegal argument in com.app.service.UserService.find(): "
        "args = ['x'], error: bad",
        "Exception in com.app.service.UserService.find(): "
        "cause = ValueError, message = bad",
    ]


def test_unexpected_failure(make_logger, lines):
    logger = make_logger(logging.INFO)
    interceptor = CallInterceptor(logger=logger)
    error = RuntimeError("boom")

    with pytest.raises(RuntimeError) as raised:
        interceptor.intercept(failing_event(error))

    assert raised.value is error
    assert lines(logger.error)[0] == (
        "Unexpected error in com.app.service.UserService.find(): boom"
    )
    assert logger.error.call_args_list[0].kwargs["exc_info"] is error


def test_failure_line_names_root_cause(make_logger, lines):
    logger = make_logger(logging.INFO)
    interceptor = CallInterceptor(logger=logger)

    try:
        try:
            raise KeyError("user")
        except KeyError as inner:
            raise RuntimeError("lookup failed") from inner
    except RuntimeError as exc:
        error = exc

    with pytest.raises(RuntimeError):
        interceptor.intercept(failing_event(error))

    assert lines(logger.error)[-1] == (
        "Exception in com.app.service.UserService.find(): "
        "cause = KeyError, message = lookup failed"
    )


def test_failure_stacktrace_only_at_debug(make_logger, lines):
    logger = make_logger(logging.DEBUG)
    interceptor = CallInterceptor(logger=logger)
    error = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        interceptor.intercept(failing_event(error))

    last = logger.error.call_args_list[-1]
    assert last.args[0].endswith(", stacktrace:")
    assert last.kwargs["exc_info"] is error


def test_root_cause_follows_chain():
    root = OSError("disk")
    middle = RuntimeError("io")
    middle.__cause__ = root
    top = ValueError("top")
    top.__cause__ = middle

    assert root_cause(top) is root
    assert root_cause(root) is root


def test_root_cause_uses_implicit_context():
    try:
        try:
            {}["missing"]
        except KeyError:
            raise RuntimeError("wrapped")
    except RuntimeError as exc:
        assert isinstance(root_cause(exc), KeyError)


def test_root_cause_respects_suppressed_context():
    try:
        try:
            {}["missing"]
        except KeyError:
            raise RuntimeError("wrapped") from None
    except RuntimeError as exc:
        assert root_cause(exc) is exc


def test_root_cause_terminates_on_cycles():
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first
    assert root_cause(first) is second

    selfish = RuntimeError("self")
    selfish.__cause__ = selfish
    assert root_cause(selfish) is selfish


@pytest.mark.asyncio
async def test_intercept_async_logs_awaited_result(make_logger, lines):
    logger = make_logger(logging.DEBUG)
    interceptor = CallInterceptor(logger=logger)

    async def fetch():
        return "JOHN"

    event = CallEvent("com.app.Repo", "fetch", ("john",), fetch)
    assert await interceptor.intercept_async(event) == "JOHN"
    assert lines(logger.debug)[-1] == "Exit: com.app.Repo.fetch() with result: JOHN"


@pytest.mark.asyncio
async def test_intercept_async_reraises(make_logger, lines):
    logger = make_logger(logging.INFO)
    interceptor = CallInterceptor(logger=logger)
    error = ValueError("bad id")

    async def fetch():
        raise error

    event = CallEvent("com.app.Repo", "fetch", (-1,), fetch)
    with pytest.raises(ValueError) as raised:
        await interceptor.intercept_async(event)

    assert raised.value is error
    assert lines(logger.error)[0] == (
        "Illegal argument in com.app.Repo.fetch(): args = [-1], error: bad id"
    )
