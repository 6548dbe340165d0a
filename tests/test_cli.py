import pytest

from liveserver.cli import parse_args


def test_defaults(site):
    config = parse_args([str(site)])
    assert config.directory == site.resolve()
    assert config.directory.is_absolute()
    assert config.port == 4000
    assert config.addr == "0.0.0.0"
    assert not config.static_only
    assert not config.verbose


def test_options(site):
    config = parse_args(["-p", "8080", "-a", "127.0.0.1", "--static", "-v", str(site)])
    assert config.port == 8080
    assert config.addr == "127.0.0.1"
    assert config.static_only
    assert config.verbose


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-a", "localhost", "."],
        ["-p", "70000", "."],
        ["does-not-exist"],
    ],
)
def test_invalid_arguments_exit(argv, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        parse_args(argv)
    assert excinfo.value.code == 2


def test_file_is_not_a_directory(site):
    with pytest.raises(SystemExit):
        parse_args([str(site / "index.html")])
