"""CLI tests for the district report entrypoint."""

import logging
from pathlib import Path

import src.program_district_report as prog
from src.config import REQUIRED_COLUMNS
from src.exceptions import ConfigurationError, SourceLoadError
from src.pipeline.district_report.runner import PipelineResult
from src.pipeline.district_report.status import PipelineState


def test_parse_arguments_defaults():
    args = prog.parse_arguments([])
    assert args.district_order == "first-seen"
    assert args.delimiter == ","
    assert args.analyses_dir is None
    assert args.no_echo is False


def test_main_passes_options_and_returns_exit_code(monkeypatch, tmp_path: Path):
    called = {}

    def fake_run(csv_path, output_file, **kwargs):
        called["csv_path"] = csv_path
        called["output_file"] = output_file
        called.update(kwargs)
        return PipelineResult(state=PipelineState.PUBLISHED, output_file=output_file)

    monkeypatch.setattr(prog, "run_from_config", fake_run)
    code = prog.main(
        [
            "--input",
            str(tmp_path / "in.csv"),
            "--output",
            str(tmp_path / "out.txt"),
            "--district-order",
            "lexicographic",
            "--analyses-dir",
            str(tmp_path / "a"),
            "--no-echo",
        ]
    )
    assert code == 0
    assert called["csv_path"] == tmp_path / "in.csv"
    assert called["output_file"] == tmp_path / "out.txt"
    assert called["district_order"] == "lexicographic"
    assert called["analyses_dir"] == tmp_path / "a"
    assert called["echo"] is False


def test_main_maps_run_states_to_exit_codes(monkeypatch):
    monkeypatch.setattr(
        prog,
        "run_from_config",
        lambda *a, **k: PipelineResult(state=PipelineState.SYNTHESIS_FAILED),
    )
    assert prog.main([]) == 2


def test_main_returns_one_on_setup_errors(monkeypatch):
    def raise_load(*a, **k):
        raise SourceLoadError("Missing required columns")

    monkeypatch.setattr(prog, "run_from_config", raise_load)
    assert prog.main([]) == 1

    def raise_config(*a, **k):
        raise ConfigurationError("Missing API key")

    monkeypatch.setattr(prog, "run_from_config", raise_config)
    assert prog.main([]) == 1


def test_main_handles_keyboard_interrupt(monkeypatch):
    def interrupted(*a, **k):
        raise KeyboardInterrupt

    monkeypatch.setattr(prog, "run_from_config", interrupted)
    assert prog.main([]) == 130


def test_missing_header_end_to_end_exits_nonzero(monkeypatch, tmp_path: Path):
    import src.config as project_config

    monkeypatch.setattr(project_config, "PROJECT_ROOT", tmp_path)
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv("CHAT_COMPLETIONS_ENDPOINT", "https://example.invalid/chat")
    csv_path = tmp_path / "in.csv"
    csv_path.write_text(",".join(REQUIRED_COLUMNS[:-1]) + "\n", encoding="utf-8")
    output = tmp_path / "out.txt"
    assert prog.main(["-i", str(csv_path), "-o", str(output)]) == 1
    assert not output.exists()


def test_configure_logging_filehandler_error(monkeypatch):
    class BadFH:
        def __init__(self, *a, **k):
            raise RuntimeError("no file handler")

    monkeypatch.setattr(logging, "FileHandler", BadFH)
    prog.configure_logging("INFO", enable_file=True)
    assert any(isinstance(h, logging.StreamHandler) for h in logging.root.handlers)
