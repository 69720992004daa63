import logging

import pytest

from swaypad.config import (
    AppConfig,
    Configuration,
    SwaypadConfig,
    coerce_to_bool,
    describe_identifier,
    parse_identifier,
)
from swaypad.config_loader import ConfigLoader
from swaypad.models import ByApplicationId, ByClass, ByTitle, ConfigError, ExitCode
from swaypad.schema import APP_SCHEMA

log = logging.getLogger("swaypad.tests")


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, False),
        ("", False),
        ("no", False),
        ("Off", False),
        (" disabled ", False),
        ("0", False),
        ("yes", True),
        ("anything", True),
        (True, True),
        (False, False),
        (0, False),
        (1, True),
    ],
)
def test_coerce_to_bool(value, expected):
    assert coerce_to_bool(value) is expected


def test_coerce_to_bool_default():
    assert coerce_to_bool(None, default=True) is True


def test_configuration_schema_defaults():
    section = Configuration({"command": "fish"}, logger=log, schema=APP_SCHEMA)
    assert section.get("command") == "fish"
    assert section.get("is_terminal") is False
    assert section.get("startup_override") is None
    assert section.get("unknown", "fallback") == "fallback"
    assert section.get_str("startup_override") == ""


def test_configuration_get_bool(mocker):
    logger = mocker.Mock()
    section = Configuration({"a": "yes", "b": "false", "c": "perhaps", "d": True}, logger=logger)
    assert section.get_bool("a") is True
    assert section.get_bool("b") is False
    assert section.get_bool("d") is True
    assert section.get_bool("missing") is False
    assert section.get_bool("missing", default=True) is True
    logger.warning.assert_not_called()
    assert section.get_bool("c") is True
    logger.warning.assert_called_once()


@pytest.mark.parametrize(
    "raw,expected",
    [
        ({"Title": "fish-term"}, ByTitle("fish-term")),
        ({"title": "fish-term"}, ByTitle("fish-term")),
        ({"AppId": "firefox"}, ByApplicationId("firefox")),
        ({"app_id": "firefox"}, ByApplicationId("firefox")),
        ({"APPID": "firefox"}, ByApplicationId("firefox")),
        ({"Class": "obsidian"}, ByClass("obsidian")),
    ],
)
def test_parse_identifier(raw, expected):
    assert parse_identifier(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "firefox",
        {},
        {"Title": "a", "Class": "b"},
        {"Instance": "firefox"},
        {"Title": ""},
        {"Title": 42},
    ],
)
def test_parse_identifier_errors(raw):
    with pytest.raises(ConfigError):
        parse_identifier(raw)


def test_describe_identifier():
    assert describe_identifier(ByTitle("a")) == "title=a"
    assert describe_identifier(ByApplicationId("b")) == "app_id=b"
    assert describe_identifier(ByClass("c")) == "class=c"


def test_app_from_section():
    section = Configuration(
        {"command": "python3", "is_terminal": "yes", "identifier": {"Title": "py"}, "startup_override": "foot python3"},
        logger=log,
        schema=APP_SCHEMA,
    )
    app = AppConfig.from_section("python", section)
    assert app == AppConfig(
        name="python",
        command="python3",
        identifier=ByTitle("py"),
        is_terminal=True,
        startup_override="foot python3",
    )


def test_app_from_section_missing_command():
    section = Configuration({"identifier": {"Title": "py"}}, logger=log, schema=APP_SCHEMA)
    with pytest.raises(ConfigError, match="no command"):
        AppConfig.from_section("python", section)


def test_app_from_section_bad_identifier():
    section = Configuration({"command": "x", "identifier": {"Name": "x"}}, logger=log, schema=APP_SCHEMA)
    with pytest.raises(ConfigError, match="application 'x'"):
        AppConfig.from_section("x", section)


def test_sample_config(sample_config_file):
    config = ConfigLoader(log).load(str(sample_config_file))
    assert config.terminal == "foot"
    assert sorted(config.apps) == ["firefox", "fish", "keepassxc", "obsidian", "python"]
    assert config.get_app("fish") == AppConfig(name="fish", command="fish", identifier=ByTitle("fish-term"), is_terminal=True)
    assert config.get_app("keepassxc").identifier == ByApplicationId("org.keepassxc.KeePassXC")
    assert config.get_app("obsidian").identifier == ByClass("obsidian")
    assert config.get_app("obsidian").is_terminal is False
    assert config.get_app("python").startup_override == "foot --title python-term --app-id pyterm python3"


def test_empty_config():
    config = SwaypadConfig.from_dict({}, log)
    assert config.terminal == ""
    assert config.apps == {}


@pytest.mark.parametrize(
    "bad",
    [
        {"command": "bad"},
        "bad",
        ["bad"],
    ],
    ids=["no-identifier", "string", "list"],
)
def test_invalid_app_fails_whole_config(bad):
    raw = {
        "apps": {
            "good": {"command": "good", "identifier": {"AppId": "good"}},
            "bad": bad,
        },
    }
    with pytest.raises(ConfigError, match="'bad'"):
        SwaypadConfig.from_dict(raw, log)


def test_empty_startup_override_is_kept():
    section = Configuration({"command": "a", "identifier": {"Title": "t"}, "startup_override": ""}, logger=log, schema=APP_SCHEMA)
    assert AppConfig.from_section("a", section).startup_override == ""


def test_apps_must_be_a_table():
    with pytest.raises(ConfigError):
        SwaypadConfig.from_dict({"apps": ["fish"]}, log)


def test_get_app_unknown():
    config = SwaypadConfig(apps={"firefox": AppConfig(name="firefox", command="firefox", identifier=ByApplicationId("firefox"))})
    with pytest.raises(ConfigError) as excinfo:
        config.get_app("firefoz")
    assert str(excinfo.value) == "Unknown application: firefoz (did you mean 'firefox'?)"
    assert excinfo.value.exit_code == ExitCode.CONFIG_ERROR

    with pytest.raises(ConfigError, match=r"^Unknown application: zzz$"):
        config.get_app("zzz")
