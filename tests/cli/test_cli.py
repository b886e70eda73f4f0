import pytest
from pytest_mock import MockerFixture
from typer.testing import CliRunner

from reauth.cli import app, main, run


def test_help_show_banner(mocker: MockerFixture):
    mocked_show = mocker.patch("reauth.cli.main.show_banner")
    runner = CliRunner()
    runner.invoke(
        app,
        ["--help"],
    )
    mocked_show.assert_called_once()


def test_run(mocker: MockerFixture):
    app = mocker.MagicMock()
    mocker.patch.object(main, "app", app)
    run()
    app.assert_called_once()


def test_run_exception(mocker: MockerFixture):
    app = mocker.MagicMock()
    err_console = mocker.MagicMock()
    app.side_effect = Exception("whatever")
    mocker.patch.object(main, "app", app)
    mocker.patch.object(main, "err_console", err_console)
    with pytest.raises(SystemExit) as exc:
        run()
    assert exc.value.code == -1
    err_console.print.assert_called_once_with("[bold red]Error:[/bold red] whatever")


def test_backends(mocker: MockerFixture):
    mocker.patch("reauth.cli.main.setup_logging")
    runner = CliRunner()

    result = runner.invoke(app, ["backends"])

    assert result.exit_code == 0
    assert "gitlab" in result.stdout
