import io
import json
import sys
import tempfile
from contextlib import redirect_stdout
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from dungeon_text.infrastructure.text_content_validator import main, validate_text_content


def _write_content(root: Path, lines, bindings) -> None:
    (root / "text-lines.json").write_text(json.dumps(lines), encoding="utf-8")
    (root / "text-trigger-bindings.json").write_text(json.dumps(bindings), encoding="utf-8")


class TextContentValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_repository_content_is_valid(self) -> None:
        self.assertEqual([], validate_text_content(Path(__file__).resolve().parents[2] / "data" / "text", strict=True))

    def test_missing_directory_is_reported(self) -> None:
        errors = validate_text_content(self.root / "does_not_exist")
        self.assertTrue(errors)
        self.assertIn("Directory not found", errors[0])

    def test_load_error_is_reported(self) -> None:
        _write_content(self.root, [{"id": "a", "weight": 1, "cooldownTurns": 0, "text": "x", "depthNorm": "abc-1"}], [])
        errors = validate_text_content(self.root)
        self.assertEqual(1, len(errors))
        self.assertIn("depth_norm", errors[0])

    def test_never_eligible_lines_are_reported(self) -> None:
        _write_content(
            self.root,
            [
                {"id": "silent", "weight": 0, "cooldownTurns": 0, "text": "x"},
                {"id": "broken_cooldown", "weight": 1, "cooldownTurns": -2, "text": "x"},
                {"id": "empty", "weight": 1, "cooldownTurns": 0, "text": ""},
                {"id": "fine", "weight": 1, "cooldownTurns": 0, "text": "x"},
            ],
            [],
        )
        errors = validate_text_content(self.root)
        self.assertEqual(3, len(errors))
        self.assertTrue(any("'silent' weight" in item for item in errors))
        self.assertTrue(any("'broken_cooldown' cooldownTurns" in item for item in errors))
        self.assertTrue(any("'empty' text is required" in item for item in errors))

    def test_dangling_bindings_reported_only_in_strict_mode(self) -> None:
        _write_content(
            self.root,
            [{"id": "a", "weight": 1, "cooldownTurns": 0, "text": "x"}],
            [{"id": "orphan", "triggerType": "loot_found", "textLineId": "gone"}],
        )
        self.assertEqual([], validate_text_content(self.root))
        strict_errors = validate_text_content(self.root, strict=True)
        self.assertEqual(["TextTriggerBinding 'orphan' references an unknown text line"], strict_errors)

    def test_main_returns_zero_for_valid_content(self) -> None:
        _write_content(self.root, [{"id": "a", "weight": 1, "cooldownTurns": 0, "text": "x"}], [])
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["--path", str(self.root)])
        self.assertEqual(0, code)
        self.assertIn("Text content valid", buf.getvalue())

    def test_undecodable_file_is_reported(self) -> None:
        (self.root / "text-lines.json").write_bytes(b'[{"id": "\xff"}]')
        (self.root / "text-trigger-bindings.json").write_text("[]", encoding="utf-8")

        errors = validate_text_content(self.root)

        self.assertEqual(1, len(errors))
        self.assertIn("Could not read text-lines.json", errors[0])

    def test_main_returns_one_for_invalid_content(self) -> None:
        _write_content(self.root, [{"id": "a", "weight": 0, "cooldownTurns": 0, "text": "x"}], [])
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["--path", str(self.root)])
        self.assertEqual(1, code)
        self.assertIn("Text content invalid (1 errors)", buf.getvalue())


if __name__ == "__main__":
    unittest.main()
