"""
Tests for the command-line entry point.
"""

import json
import logging

import pytest

from cli import build_parser, main


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    """main() points the root handler at the captured stderr; drop it afterwards."""
    yield
    logging.getLogger().handlers.clear()


def _args(catalog_file, prompt, *extra):
    return [
        "--index", catalog_file,
        "--prompt", prompt,
        "--no-llm",
        "--epsilon", "0",
        "--jitter", "0",
        "--seed", "1",
        *extra,
    ]


class TestParser:

    def test_underscore_aliases(self):
        args = build_parser().parse_args([
            "--catalog", "index.json", "--prompt", "fit",
            "--gender_pref", "women", "--pool_size", "3", "--per_role_limit", "5",
        ])

        assert args.index == "index.json"
        assert args.gender_pref == "women"
        assert args.pool_size == 3
        assert args.per_role_limit == 5

    def test_prompt_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--index", "index.json"])

    def test_invalid_gender(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--index", "i.json", "--prompt", "fit", "--gender-pref", "kids"])


class TestMain:

    def test_prints_outfits(self, catalog_file, capsys):
        code = main(_args(catalog_file, "baggy black streetwear fit", "--gender-pref", "men"))

        out = capsys.readouterr().out
        assert code == 0
        assert out.strip() == (
            "top images/top/hoodie.jpg\n"
            "bottom images/bottom/cargos.jpg\n"
            "shoes images/shoes/sneaker.jpg"
        )

    def test_pool_size(self, catalog_file, capsys):
        code = main(_args(catalog_file, "streetwear fit", "--pool-size", "2"))

        blocks = capsys.readouterr().out.strip().split("\n\n")
        assert code == 0
        assert len(blocks) == 2
        assert all(len(block.splitlines()) == 3 for block in blocks)

    def test_missing_catalog(self, tmp_path, capsys):
        code = main(_args(str(tmp_path / "missing.json"), "streetwear fit"))

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "error:" in captured.err

    def test_undecodable_catalog(self, tmp_path, capsys):
        path = tmp_path / "index.json"
        path.write_bytes(b"\xff\xfe")

        code = main(_args(str(path), "fit"))

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "error:" in captured.err

    def test_no_recommendations(self, tmp_path, capsys):
        path = tmp_path / "tops.json"
        path.write_text(json.dumps([
            {"id": "t1", "imagePath": "images/t1.jpg", "category": "top", "colours": ["black"]},
        ]), encoding="utf-8")

        code = main(_args(str(path), "streetwear fit"))

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "No outfits/items could be constructed." in captured.err
