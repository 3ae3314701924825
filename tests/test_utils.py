# tests/test_utils.py - config, metrics, logging helpers, tokenizer

import json
import logging

import pytest
from prefix_completer.context.tokenizer import simple_tokenize, split_query
from prefix_completer.utils.config_manager import DEFAULTS, Config
from prefix_completer.utils.logger_utils import PACKAGE_LOGGER, Log, configure_logging
from prefix_completer.utils.metrics_tracker import Metrics


# config -----------------------------------------------------------------
def test_config_defaults_without_file():
    cfg = Config()
    assert cfg.as_dict() == DEFAULTS
    cfg.set("max_suggestions", "3")
    assert cfg["max_suggestions"] == 3


def test_config_file_overrides_and_saves(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_suggestions": 8, "strategy": "frequency"}), encoding="utf8")
    cfg = Config(str(path))
    assert cfg["max_suggestions"] == 8
    assert cfg["strategy"] == "frequency"

    cfg.set("show_probabilities", "off")
    assert cfg["show_probabilities"] is False
    assert json.loads(path.read_text(encoding="utf8"))["show_probabilities"] is False


def test_config_bad_json_keeps_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf8")
    assert Config(str(path)).as_dict() == DEFAULTS


@pytest.mark.parametrize("bad", [
    {"max_suggestions": None},
    {"max_suggestions": "abc"},
    {"show_probabilities": "maybe"},
])
def test_config_bad_value_keeps_default(tmp_path, bad):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(dict(bad, strategy="frequency")), encoding="utf8")
    cfg = Config(str(path))
    key = next(iter(bad))
    assert cfg[key] == DEFAULTS[key]
    assert cfg["strategy"] == "frequency"


def test_config_rejects_unknown_key_and_bad_value():
    cfg = Config()
    with pytest.raises(KeyError):
        cfg.set("theme", "dark")
    with pytest.raises(ValueError):
        cfg.set("max_suggestions", "many")
    with pytest.raises(ValueError):
        cfg.set("show_probabilities", "maybe")


# metrics ------------------------------------------------------------------
def test_metrics_average_and_persist(tmp_path):
    path = tmp_path / "metrics.json"
    m = Metrics(str(path))
    assert m.avg("suggest_time") == 0.0
    m.record("suggest_time", 2.0)
    m.record("suggest_time", 4.0)
    assert m.avg("suggest_time") == pytest.approx(3.0)
    assert m.count("suggest_time") == 2
    m.save()

    again = Metrics(str(path))
    assert again.avg("suggest_time") == pytest.approx(3.0)
    assert again.rows() == [("suggest_time", pytest.approx(3.0), 2)]


# logging -------------------------------------------------------------------
@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_configure_logging_writes_file(tmp_path, package_logger):
    log_path = tmp_path / "run.log"
    configure_logging("info", str(log_path), console=False)
    with Log.time_block("unit"):
        pass
    Log.metric("words", 42)
    for h in package_logger.handlers:
        h.flush()
    text = log_path.read_text(encoding="utf-8")
    assert "INFO    | unit done:" in text
    assert "words: 42" in text


def test_configure_logging_replaces_handlers(package_logger):
    configure_logging("DEBUG")
    configure_logging("DEBUG")
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_time_block_measures_elapsed():
    with Log.time_block("noop", quiet=True) as t:
        sum(range(1000))
    assert t.elapsed >= 0.0


# tokenizer -------------------------------------------------------------------
def test_simple_tokenize_drops_punctuation():
    assert simple_tokenize("hello , world !! how's") == ["hello", "world", "how's"]
    assert simple_tokenize("") == []


@pytest.mark.parametrize("line, expected", [
    ("he", (None, "he")),
    ("hello he", ("hello", "he")),
    ("how are yo", ("are", "yo")),
    ("hello ", ("hello", "")),
    ("   ", (None, "")),
])
def test_split_query(line, expected):
    assert split_query(line) == expected
