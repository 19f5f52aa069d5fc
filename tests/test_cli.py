"""
Tests for the lzrle command-line interface.

Covers single-file and batch processing, stdin/stdout streaming, automatic
algorithm selection and exit statuses.
"""

import logging

import pytest

import lzrle.detection
from lzrle.cli import batch_output_name, build_parser, main
from lzrle.lz77 import lz77_compress
from lzrle.rle import rle_compress


class TestSingleFile:
    """One input, one output."""

    def test_compress_default_rle(self, text_file, tmp_path):
        out = tmp_path / "notes.rle"
        assert main(["compress", "-i", str(text_file), "-o", str(out)]) == 0
        assert out.read_bytes() == rle_compress(text_file.read_bytes())

    @pytest.mark.parametrize("algorithm", ["rle", "lz"])
    def test_roundtrip(self, algorithm, binary_file, tmp_path):
        packed = tmp_path / "packed"
        restored = tmp_path / "restored"
        assert main(["compress", "-a", algorithm, "-i", str(binary_file), "-o", str(packed)]) == 0
        assert main(["decompress", "-a", algorithm, "-i", str(packed), "-o", str(restored)]) == 0
        assert restored.read_bytes() == binary_file.read_bytes()

    def test_verify_flag(self, binary_file, tmp_path):
        out = tmp_path / "blob.lz"
        assert main(["compress", "-a", "lz", "--verify", "-i", str(binary_file), "-o", str(out)]) == 0
        assert out.read_bytes() == lz77_compress(binary_file.read_bytes())

    def test_strict_flag_rejects_truncated_input(self, tmp_path):
        packed = tmp_path / "truncated.rle"
        packed.write_bytes(b"\x03a\x02")
        out = tmp_path / "out"
        assert main(["decompress", "--strict", "-i", str(packed), "-o", str(out)]) == 1
        assert main(["decompress", "-i", str(packed), "-o", str(out)]) == 0
        assert out.read_bytes() == b"aaa"

    def test_missing_input_file(self, tmp_path, capsys):
        status = main(["compress", "-i", str(tmp_path / "nope"), "-o", str(tmp_path / "out")])
        assert status == 1
        assert "does not exist" in capsys.readouterr().err

    def test_missing_output_directory(self, text_file, tmp_path):
        out = tmp_path / "no-such-dir" / "out.rle"
        assert main(["compress", "-i", str(text_file), "-o", str(out)]) == 1

    def test_corrupt_input(self, tmp_path):
        packed = tmp_path / "bad.lz"
        packed.write_bytes(b"\x00\x10\x05\x00")
        assert main(["decompress", "-a", "lz", "-i", str(packed), "-o", str(tmp_path / "o")]) == 1

    def test_config_file(self, binary_file, tmp_path):
        config = tmp_path / "lzrle.json"
        config.write_text('{"lz77": {"window_size": 32, "lookahead": 15}}')
        out = tmp_path / "blob.lz"
        assert main(
            ["compress", "-a", "lz", "--config", str(config), "-i", str(binary_file), "-o", str(out)]
        ) == 0
        assert out.read_bytes() == lz77_compress(binary_file.read_bytes(), window_size=32)

    def test_config_file_not_an_object(self, text_file, tmp_path, capsys):
        config = tmp_path / "lzrle.json"
        config.write_text("[1, 2]")
        status = main(
            ["compress", "--config", str(config), "-i", str(text_file), "-o", str(tmp_path / "out")]
        )
        assert status == 1
        assert "JSON object" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()


class TestStreams:
    """'-' selects stdin and stdout."""

    def test_stdin_to_stdout(self, binary_stdio):
        stdout = binary_stdio(b"aaaabbbccd")
        assert main(["compress", "-a", "rle", "-i", "-", "-o", "-"]) == 0
        assert stdout.getvalue() == bytes([4, 97, 3, 98, 2, 99, 1, 100])

    def test_auto_on_stdin_uses_lz(self, binary_stdio):
        text = b"plain text that would otherwise pick rle"
        stdout = binary_stdio(text)
        assert main(["compress", "--auto-algorithm", "-i", "-", "-o", "-"]) == 0
        assert stdout.getvalue() == lz77_compress(text)


class TestAutoAlgorithm:
    """Automatic codec selection from a file sample."""

    def test_text_file_selects_rle(self, text_file, tmp_path):
        pytest.importorskip("numpy")
        out = tmp_path / "auto.out"
        assert main(["compress", "--auto-algorithm", "-i", str(text_file), "-o", str(out)]) == 0
        assert out.read_bytes() == rle_compress(text_file.read_bytes())

    def test_binary_file_selects_lz(self, binary_file, tmp_path):
        pytest.importorskip("numpy")
        out = tmp_path / "auto.out"
        assert main(["compress", "-a", "auto", "-i", str(binary_file), "-o", str(out)]) == 0
        assert out.read_bytes() == lz77_compress(binary_file.read_bytes())

    def test_file_falls_back_without_detection(self, text_file, tmp_path, monkeypatch, caplog):
        monkeypatch.setattr(lzrle.detection, "DETECTION_AVAILABLE", False)
        out = tmp_path / "auto.out"
        with caplog.at_level(logging.WARNING, logger="lzrle.cli"):
            assert main(["compress", "--auto-algorithm", "-i", str(text_file), "-o", str(out)]) == 0
        assert out.read_bytes() == lz77_compress(text_file.read_bytes())
        assert "AUTO falls back to lz" in caplog.text
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_auto_rejected_for_decompress(self, text_file, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["decompress", "--auto-algorithm", "-i", str(text_file), "-o", str(tmp_path / "x")])
        assert exc_info.value.code == 2


class TestMultipleFiles:
    """Batch mode over a comma-separated input list."""

    def test_batch_compress(self, text_file, binary_file, tmp_path):
        out_dir = tmp_path / "packed"
        out_dir.mkdir()
        inputs = f"{text_file},{binary_file}"
        status = main(
            ["compress", "-a", "lz", "--multiple-files", "-i", inputs, "--output-dir", str(out_dir)]
        )
        assert status == 0
        assert (out_dir / "notes.txt").read_bytes() == lz77_compress(text_file.read_bytes())
        assert (out_dir / "blob.bin").read_bytes() == lz77_compress(binary_file.read_bytes())

    def test_batch_continues_after_failure(self, text_file, tmp_path):
        out_dir = tmp_path / "packed"
        out_dir.mkdir()
        inputs = f"{tmp_path / 'missing.txt'},{text_file}"
        status = main(["compress", "--multiple-files", "-i", inputs, "--output-dir", str(out_dir)])
        assert status == 1
        assert (out_dir / "notes.txt").exists()
        assert not (out_dir / "missing.txt").exists()

    def test_batch_duplicate_names_skipped(self, tmp_path, caplog):
        first = tmp_path / "a" / "x.txt"
        second = tmp_path / "b" / "x.txt"
        for path, content in ((first, b"aaaabbbb"), (second, b"ccccdddd")):
            path.parent.mkdir()
            path.write_bytes(content)
        out_dir = tmp_path / "packed"
        out_dir.mkdir()

        with caplog.at_level(logging.WARNING):
            status = main(
                ["compress", "--multiple-files", "-i", f"{first},{second}", "--output-dir", str(out_dir)]
            )
        assert status == 0
        assert (out_dir / "x.txt").read_bytes() == rle_compress(b"aaaabbbb")
        assert "output name x.txt already used" in caplog.text
        assert "Batch completed with 1 warning(s)" in caplog.text

    def test_batch_requires_output_dir(self, text_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["compress", "--multiple-files", "-i", str(text_file)])
        assert exc_info.value.code == 2

    def test_batch_output_dir_must_exist(self, text_file, tmp_path):
        status = main(
            [
                "compress",
                "--multiple-files",
                "-i",
                str(text_file),
                "--output-dir",
                str(tmp_path / "absent"),
            ]
        )
        assert status == 1

    def test_output_names(self):
        assert batch_output_name("-") == "stdin"
        assert batch_output_name("/data/in/report.csv") == "report.csv"


class TestArguments:
    """Argument parsing."""

    def test_output_required_for_single_file(self, text_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["compress", "-i", str(text_file)])
        assert exc_info.value.code == 2

    def test_unknown_algorithm(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["compress", "-a", "zip", "-i", "x", "-o", "y"])

    def test_defaults(self):
        args = build_parser().parse_args(["compress", "-i", "in", "-o", "out"])
        assert args.algorithm == "rle"
        assert not args.auto_algorithm
        assert not args.multiple_files
