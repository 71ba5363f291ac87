"""
Tests for the pdfstencil command-line interface.
"""

import pytest

from pdfstencil import __version__
from pdfstencil.cli import create_parser, main, render_sample


class TestCLI:
    """Test cases for the CLI."""

    def test_parser_render(self):
        args = create_parser().parse_args(["render", "out.pdf", "--pages", "5", "--footer-pages", "even"])

        assert args.command == "render"
        assert args.output == "out.pdf"
        assert args.pages == 5
        assert args.footer_pages == "even"
        assert args.orientation == "portrait"

    def test_parser_rejects_bad_footer_pages(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["render", "out.pdf", "--footer-pages", "sometimes"])

    def test_version(self, capsys):
        assert main(["--no-rich", "version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main(["--no-rich"]) == 0
        assert "render" in capsys.readouterr().out

    def test_render(self, temp_dir, capsys):
        output = temp_dir / "sample.pdf"

        code = main([
            "--no-rich", "render", str(output),
            "--pages", "4", "--header", "Annual report",
            "--footer", "Confidential", "--footer-pages", "odd",
            "--no-compress",
        ])

        assert code == 0
        data = output.read_bytes()
        assert data.startswith(b"%PDF")
        assert data.count(b"(Annual report) Tj") == 4
        assert data.count(b"(Confidential) Tj") == 2
        assert b"(page 4 of 4) Tj" in data
        assert "Saved" in capsys.readouterr().out

    def test_render_invalid_pages(self, temp_dir, capsys):
        code = main(["--no-rich", "render", str(temp_dir / "bad.pdf"), "--pages", "0"])

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_render_sample_adds_extension(self, temp_dir):
        path = render_sample(temp_dir / "plain", pages=1, page_numbers=False)

        assert path.suffix == ".pdf"
        assert path.exists()
