from contextlib import redirect_stderr, redirect_stdout
import io
import json
import os
from pathlib import Path
import subprocess
import sys
import tempfile
import unittest
from unittest.mock import patch

from comment_tree.main import run_cli


PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DATA_DIR = Path(__file__).resolve().parent / "data"


def _run_in_process(argv: list[str], env: dict[str, str] | None = None) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    environment = {"COMMENT_TREE_ENV_FILE": str(PROJECT_ROOT / "missing.env")}
    environment.update(env or {})
    with patch.dict(os.environ, environment, clear=True):
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = run_cli(argv)
    return code, stdout.getvalue(), stderr.getvalue()


class CliTests(unittest.TestCase):
    def test_default_run_collapses_threads(self) -> None:
        code, stdout, stderr = _run_in_process([str(TEST_DATA_DIR / "sample_thread.txt")])

        self.assertEqual(code, 0, msg=stderr)
        self.assertIn("Comment thread: sample_thread.txt (5 comments, 2 threads)", stdout)
        self.assertIn("#1 Great article, thanks for sharing. | expand [3]", stdout)
        self.assertIn("#5 Has anyone benchmarked this?", stdout)
        self.assertNotIn("Which part exactly?", stdout)

    def test_expand_all_and_select(self) -> None:
        code, stdout, stderr = _run_in_process(
            [str(TEST_DATA_DIR / "sample_thread.txt"), "--expand-all", "--select", "3"]
        )

        self.assertEqual(code, 0, msg=stderr)
        self.assertIn("> |   |   `-- #3 Which part exactly?", stdout)
        self.assertIn("collapse [3]", stdout)

    def test_toggle_opens_one_thread(self) -> None:
        code, stdout, stderr = _run_in_process([str(TEST_DATA_DIR / "sample_thread.txt"), "--toggle", "1"])

        self.assertEqual(code, 0, msg=stderr)
        self.assertIn("Which part exactly?", stdout)

    def test_env_can_disable_start_collapse(self) -> None:
        code, stdout, _ = _run_in_process(
            [str(TEST_DATA_DIR / "sample_thread.txt")],
            env={"COMMENT_TREE_COLLAPSE_ON_START": "false"},
        )

        self.assertEqual(code, 0)
        self.assertIn("Which part exactly?", stdout)

    def test_json_input_and_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "out.json"
            code, stdout, stderr = _run_in_process(
                [str(TEST_DATA_DIR / "sample_thread.json"), "--no-collapse", "--output", str(output_path)]
            )

            self.assertEqual(code, 0, msg=stderr)
            self.assertIn("JSON exported to:", stdout)
            loaded = json.loads(output_path.read_text(encoding="utf-8"))
            self.assertEqual(loaded["comment_count"], 3)
            self.assertTrue(loaded["tree"]["children"][0]["is_open"])

    def test_missing_file_returns_one(self) -> None:
        code, _, stderr = _run_in_process([str(TEST_DATA_DIR / "absent.txt")])

        self.assertEqual(code, 1)
        self.assertIn("Failed to read thread file", stderr)

    def test_negative_depth_returns_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.json"
            path.write_text(json.dumps([[0, "a"], [-2, "b"]]), encoding="utf-8")

            code, _, stderr = _run_in_process([str(path)])

        self.assertEqual(code, 2)
        self.assertIn("depth must be non-negative", stderr)

    def test_unknown_node_returns_three(self) -> None:
        code, _, stderr = _run_in_process([str(TEST_DATA_DIR / "sample_thread.txt"), "--select", "42"])

        self.assertEqual(code, 3)
        self.assertIn("No comment node with index 42", stderr)

    def test_module_entrypoint_runs(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "comment_tree.main", str(TEST_DATA_DIR / "sample_thread.txt")],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            check=False,
        )

        self.assertEqual(result.returncode, 0, msg=result.stderr)
        self.assertIn("Comment thread", result.stdout)


if __name__ == "__main__":
    unittest.main()
