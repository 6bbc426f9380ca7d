import logging

import pytest

import main


QUIZ_YAML = """- question: 問題1
  answer: 答え1
  criteria:
    ok: [別解]
"""


@pytest.fixture
def quiz_file(tmp_path):
    path = tmp_path / "quiz.yaml"
    path.write_text(QUIZ_YAML, encoding="utf-8")
    return path


def _run(argv):
    args = main._parse_args(argv)
    return main.run(args, main.load_config(args.config))


def test_missing_input_is_error(caplog):
    with caplog.at_level(logging.ERROR):
        assert _run([]) == 1
    assert "--input" in caplog.text


def test_missing_output_is_error(quiz_file):
    assert _run(["--input", str(quiz_file)]) == 1


def test_validate_ok(quiz_file, caplog):
    with caplog.at_level(logging.INFO):
        assert _run(["--input", str(quiz_file), "--validate"]) == 0
    assert "1 quiz items" in caplog.text


def test_validate_reports_each_issue(tmp_path, caplog):
    path = tmp_path / "bad.yaml"
    path.write_text("- question: q\n  answer: ''\n  criteria:\n    maybe: [x]\n", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert _run(["--input", str(path), "--validate"]) == 1
    assert "2 issue(s)" in caplog.text
    assert "答え (answer) が空です" in caplog.text
    assert "'maybe'" in caplog.text


def test_csv_conversion(quiz_file, tmp_path):
    out = tmp_path / "quiz.csv"
    assert _run(["--input", str(quiz_file), "--output", str(out)]) == 0
    assert "「別解」" in out.read_text(encoding="utf-8")


@pytest.mark.parametrize("fmt, suffix", [("html", ".html"), ("markdown", ".md"), ("md", ".md")])
def test_builtin_formats(quiz_file, tmp_path, fmt, suffix):
    out = tmp_path / f"quiz{suffix}"
    assert _run(["--input", str(quiz_file), "--output", str(out), "--format", fmt]) == 0
    text = out.read_text(encoding="utf-8")
    assert "問題1" in text
    assert "「別解」" in text


def test_custom_template(quiz_file, tmp_path):
    template = tmp_path / "custom.j2"
    template.write_text("{% for item in items %}{{ addQuotes(item.answer) }}{% endfor %}", encoding="utf-8")
    out = tmp_path / "custom.txt"
    assert _run(["--input", str(quiz_file), "--output", str(out), "--template", str(template), "--format", "pdf"]) == 0
    assert out.read_text(encoding="utf-8") == "「答え1」"


def test_unsupported_format(quiz_file, tmp_path):
    assert _run(["--input", str(quiz_file), "--output", str(tmp_path / "x.pdf"), "--format", "pdf"]) == 1


def test_broken_template_returns_error(quiz_file, tmp_path):
    template = tmp_path / "broken.j2"
    template.write_text("{% for item in items %}", encoding="utf-8")
    assert _run(["--input", str(quiz_file), "--output", str(tmp_path / "o.txt"), "--template", str(template)]) == 1


def test_load_config_merges_defaults(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("csv:\n  encoding: utf-8-sig\n", encoding="utf-8")
    cfg = main.load_config(cfg_path)
    assert cfg["csv"]["encoding"] == "utf-8-sig"
    assert cfg["templates"] == {"html": "", "markdown": ""}


def test_load_config_invalid_falls_back(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("- just\n- a list\n", encoding="utf-8")
    assert main.load_config(cfg_path) == main.DEFAULT_CONFIG


def test_template_override_from_config(quiz_file, tmp_path):
    template = tmp_path / "mine.j2"
    template.write_text("custom {{ len(items) }}", encoding="utf-8")
    cfg = main.load_config(tmp_path / "missing.yaml")
    cfg["templates"]["html"] = str(template)
    out = tmp_path / "quiz.html"
    args = main._parse_args(["--input", str(quiz_file), "--output", str(out), "--format", "html"])
    assert main.run(args, cfg) == 0
    assert out.read_text(encoding="utf-8") == "custom 1"


def test_null_config_sections_fall_back_to_defaults(quiz_file, tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("csv: null\ntemplates: null\npaths: null\noutput: null\n", encoding="utf-8")
    out = tmp_path / "quiz.html"

    assert _run(["--input", str(quiz_file), "--output", str(out), "--format", "html", "--config", str(cfg_path)]) == 0
    assert "問題1" in out.read_text(encoding="utf-8")
    assert _run(["--input", str(quiz_file), "--output", str(tmp_path / "q.csv"), "--config", str(cfg_path)]) == 0


def test_setup_logging_with_null_paths(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main._setup_logging({"paths": None})
    assert list(tmp_path.iterdir()) == []


def test_bad_csv_encoding_returns_error(quiz_file, tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("csv:\n  encoding: no-such-codec\n", encoding="utf-8")
    args = ["--input", str(quiz_file), "--output", str(tmp_path / "q.csv"), "--config", str(cfg_path)]
    assert _run(args) == 1
