import json
from pathlib import Path
import subprocess
import sys


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SCRIPT_PATH = PROJECT_ROOT / "scripts" / "build_lexicon.py"


def _run_script(args: list[str]) -> subprocess.CompletedProcess[str]:
    command = [sys.executable, str(SCRIPT_PATH)] + args
    return subprocess.run(
        command,
        cwd=str(PROJECT_ROOT),
        capture_output=True,
        text=True,
        check=False,
    )


def test_build_lexicon_script_writes_tables(tmp_path):
    dump = tmp_path / "lefff.mlex"
    dump.write_text(
        "chat\tnc\tchat\tms\nchats\tnc\tchat\tmp\nbroken\tnc\n\nsoit\tauxEtre\têtre\tPS3s\n",
        encoding="utf-8",
    )
    output_dir = tmp_path / "lexicon"

    result = _run_script([str(dump), "--output-dir", str(output_dir), "--json"])

    assert result.returncode == 0, result.stderr
    assert "LEXICON_BUILD_OK processed=3 malformed=1" in result.stdout
    assert "LEXICON_REVIEW ambiguous_traits=1" in result.stdout
    lemma_table = json.loads((output_dir / "lemmaToForms.json").read_text(encoding="utf-8"))
    assert lemma_table["chat"] == ["chat", "chats"]
    assert (output_dir / "formToAnalyses.json").is_file()
    assert (output_dir / "lemmaPosToForms.json").is_file()


def test_build_lexicon_script_reports_missing_input(tmp_path):
    result = _run_script([str(tmp_path / "missing.mlex"), "--output-dir", str(tmp_path / "out")])
    assert result.returncode == 1
    assert "LEXICON_BUILD_FAILED" in result.stderr
