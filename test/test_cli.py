"""Test the scqkit-run driver end to end with a mocked HTTP session."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from scqkit import cli
from scqkit.vis import TerminalPrinter

from utils import BACKENDS_PAYLOAD


@pytest.fixture
def qasm_file(tmp_path: Path) -> Path:
    path = tmp_path / "bell.qasm"
    path.write_text('OPENQASM 2.0;\ninclude "qelib1.inc";\nqreg q[1];\ncreg c[0];\nh q[0];\n')
    return path


@pytest.fixture
def mock_post(monkeypatch: pytest.MonkeyPatch, make_response) -> MagicMock:
    """Route discovery and execution requests to canned responses."""

    def _post(url, **kwargs):
        if url.endswith("qbackend/get_backends/"):
            return make_response(json_body=BACKENDS_PAYLOAD)
        return make_response(text='{"status": "queued"}')

    post = MagicMock(side_effect=_post)
    monkeypatch.setattr(requests.Session, "post", post)
    return post


def test_run_success(qasm_file, credential_file, mock_post, capsys):
    code = cli.main(["--qasm", str(qasm_file), "--credential", str(credential_file), "--name", "cli"])

    assert code == 0
    assert '{"status": "queued"}' in capsys.readouterr().out
    assert mock_post.call_count == 2
    assert mock_post.call_args.args[0].endswith("qbackend/scq_kit/")


def test_run_async_flag(qasm_file, credential_file, mock_post):
    assert cli.main(["--qasm", str(qasm_file), "--credential", str(credential_file), "--async"]) == 0
    assert mock_post.call_args.args[0].endswith("qbackend/scq_kit_asyc/")


def test_unknown_backend_exits_nonzero(qasm_file, credential_file, mock_post):
    code = cli.main(["--qasm", str(qasm_file), "--credential", str(credential_file), "--backend", "Nowhere"])
    assert code == 1
    assert mock_post.call_count == 1


def test_missing_qasm_file(tmp_path, credential_file):
    assert cli.main(["--qasm", str(tmp_path / "missing.qasm"), "--credential", str(credential_file)]) == 1


def test_missing_credentials(qasm_file, tmp_path, mock_post):
    code = cli.main(["--qasm", str(qasm_file), "--credential", str(tmp_path / "none")])
    assert code == 1
    mock_post.assert_not_called()


def test_qasm_is_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_list_backends_marks_selected(qasm_file, credential_file, mock_post, capsys):
    code = cli.main([
        "--qasm", str(qasm_file),
        "--credential", str(credential_file),
        "--backend", "ScQ-P10",
        "--list-backends",
    ])

    assert code == 0
    err = capsys.readouterr().err
    assert "Backends" in err
    rows = {line.split()[0]: line for line in err.splitlines() if line.split()[:1] in (["Dongling"], ["ScQ-P10"])}
    assert set(rows) == {"Dongling", "ScQ-P10"}
    assert "*" in rows["ScQ-P10"]
    assert "*" not in rows["Dongling"]
    assert "136" in rows["Dongling"]


def test_print_backends_empty_catalog_warns(capsys):
    TerminalPrinter(enable_color=False).print_backends({}, selected="Dongling")

    err = capsys.readouterr().err
    assert "[WARNING]" in err
    assert "no backends discovered" in err
