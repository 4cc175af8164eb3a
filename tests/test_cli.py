import pytest

from silverbrain.cli import (
    DEFAULT_PORT,
    build_parser,
    build_server_parser,
    main,
    server_main,
)


def test_server_start_defaults():
    args = build_parser().parse_args(["server", "start"])
    assert args.command == "server"
    assert args.server_command == "start"
    assert args.port == DEFAULT_PORT
    assert args.data_path is None


def test_server_start_options():
    args = build_parser().parse_args(["server", "start", "-d", "/tmp/brain", "-p", "8080"])
    assert args.data_path == "/tmp/brain"
    assert args.port == 8080


def test_server_start_long_options():
    args = build_parser().parse_args(
        ["server", "start", "--data-path", "/tmp/brain", "--port", "6000"]
    )
    assert (args.data_path, args.port) == ("/tmp/brain", 6000)


def test_server_parser_start():
    args = build_server_parser().parse_args(["start", "--port", "7000"])
    assert args.command == "start"
    assert args.port == 7000
    assert args.data_path is None


def test_server_parser_default_port():
    args = build_server_parser().parse_args(["start"])
    assert args.port == DEFAULT_PORT


@pytest.mark.parametrize("port", ["abc", "-1"])
def test_invalid_port_is_rejected(port):
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["server", "start", "--port", port])
    assert info.value.code == 2


def test_main_requires_command():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_main_requires_server_subcommand():
    with pytest.raises(SystemExit) as info:
        main(["server"])
    assert info.value.code == 2


def test_server_main_rejects_unknown_command():
    with pytest.raises(SystemExit) as info:
        server_main(["stop"])
    assert info.value.code == 2


def test_main_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
    assert "silver-brain" in capsys.readouterr().out