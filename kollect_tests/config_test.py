import suite
import logging
from kollect import Collection, Settings, configure, configure_logging
from kollect.config import get_settings, reset

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises


class _Records(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


class Shelf(Collection):
    pass


# settings

@test("settings carry the documented defaults")
def test_defaults():
    settings = Settings()
    assert_equal(settings.json_separators, (',', ':'))
    assert_equal(settings.pretty_indent, 4)
    assert_equal(settings.json_depth, 512)
    assert_equal(settings.percentage_precision, 2)
    assert_that(settings.escape_when_casting_to_string is False, "no escaping by default")


@test("invalid settings raise ValueError")
def test_validation():
    assert_raises(ValueError, Settings, json_depth=0)
    assert_raises(ValueError, Settings, pretty_indent=-1)
    assert_raises(ValueError, Settings, percentage_precision=-1)
    assert_raises(ValueError, Settings, json_separators=(',',))
    assert_raises(ValueError, Settings, log_level='chatty')


@test("settings can be read from the environment")
def test_from_env():
    settings = Settings.from_env({
        'KOLLECT_JSON_DEPTH': '16',
        'KOLLECT_PRETTY_INDENT': '2',
        'KOLLECT_ESCAPE': 'yes',
        'KOLLECT_LOG_LEVEL': 'debug',
        'UNRELATED': 'ignored',
    })
    assert_equal(settings.json_depth, 16)
    assert_equal(settings.pretty_indent, 2)
    assert_that(settings.escape_when_casting_to_string, "yes turns escaping on")
    assert_equal(settings.percentage_precision, 2)
    assert_equal(Settings.from_env({}), Settings())


# configure / reset

@test("configure replaces the active settings until reset")
def test_configure():
    try:
        configured = configure(pretty_indent=2)
        assert_that(get_settings() is configured, "configure activates the new settings")
        assert_equal(Collection([1]).to_pretty_json(), '[\n  1\n]')
    finally:
        reset()
    assert_equal(get_settings(), Settings())


@test("configure rejects unknown names")
def test_configure_unknown():
    assert_raises(TypeError, configure, colour='blue')
    assert_equal(get_settings(), Settings())


@test("percentage precision follows settings")
def test_configured_precision():
    try:
        configure(percentage_precision=0)
        assert_equal(Collection([1, 1, 2]).percentage(lambda v: v == 1), 67)
    finally:
        reset()
    assert_equal(Collection([1, 1, 2]).percentage(lambda v: v == 1), 66.67)


# logging

@test("configure_logging sets the package logger level")
def test_configure_logging():
    package_logger = logging.getLogger('kollect')
    previous = package_logger.level
    try:
        configure_logging('DEBUG')
        assert_equal(package_logger.level, logging.DEBUG)
    finally:
        package_logger.setLevel(previous)


@test("macro registration is logged at debug level")
def test_macro_logging():
    macro_logger = logging.getLogger('kollect.macros')
    handler = _Records()
    previous = macro_logger.level
    macro_logger.addHandler(handler)
    macro_logger.setLevel(logging.DEBUG)
    try:
        Shelf.macro('stacked', lambda self: self)
        Shelf.flush_macros()
    finally:
        macro_logger.removeHandler(handler)
        macro_logger.setLevel(previous)
    assert_that(any("'stacked' registered on Shelf" in message for message in handler.messages),
                "registration was logged")
    assert_that(any("flushed on Shelf" in message for message in handler.messages), "flush was logged")


if __name__ == "__main__":
    suite.run(title="kollect configuration test suite")
