import configparser
from pathlib import Path

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def test_alembic_ini_carries_logging_config():
    parser = configparser.ConfigParser()
    assert parser.read(ALEMBIC_INI)

    for section in ("loggers", "handlers", "formatters"):
        assert parser.has_section(section)
    for key in parser["loggers"]["keys"].split(","):
        assert parser.has_section(f"logger_{key.strip()}")
    assert parser.has_section("handler_console")
    assert parser.has_section("formatter_generic")


def test_alembic_env_does_not_hide_logging_errors():
    env_py = (ALEMBIC_INI.parent / "alembic" / "env.py").read_text()
    assert "except KeyError" not in env_py
