"""Tests for the option functions applied by ``new``."""

from __future__ import annotations

import json

import pytest

from monolog import fields, options
from monolog.config import Settings
from monolog.errors import OptionsError
from monolog.level import Level
from monolog.logger import new


def read(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestOutputOptions:
    def test_output_and_error_paths(self, tmp_path):
        out, err = tmp_path / "out.log", tmp_path / "err.log"
        logger = new(
            options.with_output_paths(str(out)),
            options.with_error_output_paths(str(err)),
        )

        def broken():
            raise KeyError("missing")

        logger.add_processor(broken)
        logger.info("written")
        logger.sync()

        assert read(out)[0]["msg"] == "written"
        assert "processor" in err.read_text()

    def test_empty_output_paths_rejected(self):
        with pytest.raises(OptionsError):
            new(options.with_output_paths())

    def test_standard_stream_names_normalized(self, capsys):
        logger = new(options.with_output_paths(" STDOUT "))
        assert logger.config.output_paths == ["stdout"]

    def test_console_encoding(self, tmp_path):
        out = tmp_path / "out.log"
        logger = new(options.with_encoding("Console"), options.with_output_paths(str(out)))
        assert logger.config.encoding == "console"
        logger.info("plain text")
        assert "plain text" in out.read_text()


class TestLevelOption:
    def test_unknown_level_rejected(self):
        with pytest.raises(OptionsError) as info:
            new(options.with_level("chatty"))
        assert "chatty" in str(info.value)

    def test_last_option_wins(self, capsys):
        logger = new(options.with_level("debug"), options.with_level("error"))
        assert logger.level.level is Level.ERROR


class TestAnnotationOptions:
    def test_caller_and_stacktrace(self, capsys):
        logger = new(options.with_caller(), options.with_stacktrace())
        assert logger.config.disable_caller is False
        assert logger.config.disable_stacktrace is False

        logger.error("failed")
        record = json.loads(capsys.readouterr().out)
        assert record["func_name"] == "test_caller_and_stacktrace"
        assert "stack" in record

    def test_time_format_epoch(self, capsys):
        logger = new(options.with_time_format(None))
        logger.info("m")
        assert isinstance(json.loads(capsys.readouterr().out)["ts"], float)


class TestProcessorAndFieldOptions:
    def test_processors_registered_in_order(self, capsys):
        logger = new(
            options.with_processors(lambda: fields.string("a", "1")),
            options.with_processors(lambda: fields.string("b", "2")),
        )
        logger.info("m")
        assert list(json.loads(capsys.readouterr().out)["extra"]) == ["a", "b"]

    def test_non_callable_processor_rejected(self):
        with pytest.raises(OptionsError) as info:
            new(options.with_processors("not callable"))
        assert isinstance(info.value.__cause__, TypeError)

    def test_initial_fields(self, capsys):
        logger = new(options.with_initial_fields(fields.string("app", "billing")))
        child = logger.with_fields(fields.string("job", "nightly"))

        logger.info("root")
        child.info("child")

        root_rec, child_rec = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert root_rec["app"] == "billing"
        assert child_rec["app"] == "billing"
        assert child_rec["job"] == "nightly"
        assert [f.key for f in child.context] == ["app", "job"]

    def test_initial_fields_rejects_non_fields(self):
        with pytest.raises(OptionsError):
            new(options.with_initial_fields({"app": "billing"}))


class TestFromSettings:
    def test_applies_settings(self, tmp_path):
        out = tmp_path / "out.log"
        settings = Settings(
            LEVEL="warning",
            OUTPUT_PATHS=f"{out}",
            ENABLE_CALLER=True,
            TIME_FORMAT=None,
        )
        logger = new(options.from_settings(settings))

        assert logger.level.level is Level.WARNING
        assert logger.config.disable_caller is False
        logger.info("dropped")
        logger.warning("kept")
        (rec,) = read(out)
        assert rec["msg"] == "kept"

    def test_bad_settings_surface_as_options_error(self):
        with pytest.raises(OptionsError):
            new(options.from_settings(Settings(ENCODING="yaml")))
