import errno

import pytest

from readability_cli.config import ConfidencePolicy, Config, proxy_from_env
from readability_cli.errors import (
    DataError,
    Diagnostics,
    ExitCode,
    ExtractionCrash,
    InputNotFound,
    NetworkError,
    PermissionDenied,
    UsageError,
    classify,
    from_os_error,
)


@pytest.mark.parametrize(
    "exc, code",
    [
        (UsageError("x"), 64),
        (DataError("x"), 65),
        (InputNotFound("x"), 66),
        (NetworkError("x"), 68),
        (ExtractionCrash("x"), 70),
        (PermissionDenied("x"), 77),
        (FileNotFoundError(errno.ENOENT, "No such file", "a.html"), 66),
        (PermissionError(errno.EACCES, "Permission denied", "a.html"), 77),
        (IsADirectoryError(errno.EISDIR, "Is a directory", "dir"), 65),
        (RuntimeError("?"), 70),
    ],
)
def test_classify(exc, code):
    assert classify(exc) == code


def test_not_found_and_permission_are_distinct():
    assert classify(FileNotFoundError(errno.ENOENT, "x")) != classify(PermissionError(errno.EACCES, "x"))


def test_from_os_error_message_names_the_file():
    exc = from_os_error(FileNotFoundError(errno.ENOENT, "No such file or directory", "missing.html"))
    assert isinstance(exc, InputNotFound)
    assert str(exc) == "No such file or directory: 'missing.html'"


class TestDiagnostics:
    def test_warnings_do_not_change_exit_code(self, capsys):
        diagnostics = Diagnostics()
        diagnostics.note("Reading...")
        diagnostics.warn("careful")
        assert diagnostics.exit_code == ExitCode.OK
        err = capsys.readouterr().err
        assert "Reading..." in err
        assert "careful" in err

    def test_quiet_drops_notes_and_warnings_but_not_errors(self, capsys):
        diagnostics = Diagnostics(quiet=True)
        diagnostics.note("Reading...")
        diagnostics.warn("careful")
        diagnostics.fail(DataError("broken [data]"))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == "broken [data]"

    def test_first_failure_wins(self, capsys):
        diagnostics = Diagnostics()
        diagnostics.fail(NetworkError("a"))
        diagnostics.fail(DataError("b"))
        assert diagnostics.exit_code == ExitCode.NO_HOST


class TestConfig:
    def test_policy_defaults_to_keep(self):
        assert ConfidencePolicy.parse(None) == (ConfidencePolicy.KEEP, False)
        assert Config().low_confidence is ConfidencePolicy.KEEP

    def test_no_op_is_deprecated_keep(self):
        assert ConfidencePolicy.parse("no-op") == (ConfidencePolicy.KEEP, True)

    @pytest.mark.parametrize("value", ["keep", "force", "exit"])
    def test_known_modes(self, value):
        assert ConfidencePolicy.parse(value) == (ConfidencePolicy(value), False)

    def test_unknown_mode(self):
        with pytest.raises(UsageError, match="keep, force, exit"):
            ConfidencePolicy.parse("maybe")

    def test_proxy_env_order(self):
        assert proxy_from_env({}) is None
        assert proxy_from_env({"HTTP_PROXY": "http://c", "HTTPS_PROXY": "http://b"}) == "http://b"
        assert proxy_from_env({"https_proxy": "http://a", "HTTPS_PROXY": "http://b"}) == "http://a"
        assert proxy_from_env({"https_proxy": "", "http_proxy": "http://d"}) == "http://d"
        assert proxy_from_env({"http_proxy": "http://d", "HTTPS_PROXY": "http://b"}) == "http://b"

    def test_wants_properties(self):
        assert not Config().wants_properties
        assert Config(json=True).wants_properties
        assert Config(properties=("title",)).wants_properties
