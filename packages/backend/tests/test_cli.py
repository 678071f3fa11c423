"""CLI smoke tests via click's CliRunner."""

from click.testing import CliRunner

from chirpy.cli.main import cli


def test_gen_secret():
    runner = CliRunner()
    a = runner.invoke(cli, ["gen-secret"])
    b = runner.invoke(cli, ["gen-secret"])
    assert a.exit_code == 0
    assert len(a.output.strip()) >= 64
    assert a.output != b.output


def test_gen_secret_refuses_short_secrets():
    result = CliRunner().invoke(cli, ["gen-secret", "--bytes", "8"])
    assert result.exit_code != 0
    assert "at least 32 bytes" in result.output


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("serve", "gen-secret", "init-db"):
        assert command in result.output
