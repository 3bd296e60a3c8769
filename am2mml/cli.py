import argparse
import sys
import webbrowser
from pathlib import Path

from .asciimath import parse, pretty, to_string
from .config import load_config
from .converter import Converter
from .html_builder import build_page, build_preview


def _read_expression(value: str) -> str:
    """Return the expression argument, reading stdin for ``-``."""
    if value == "-":
        return sys.stdin.read()
    return value


def _write_page(html: str, output_path: Path, open_browser: bool) -> None:
    output_path.write_text(html, encoding="utf-8")
    print(f"Written → {output_path}")
    if open_browser:
        webbrowser.open(output_path.absolute().as_uri())


def main() -> None:
    """CLI entry point: translate an expression or convert a document."""
    parser = argparse.ArgumentParser(
        prog="am2mml",
        description="Translate AsciiMath notation to MathML",
    )
    parser.add_argument(
        "expression",
        nargs="?",
        default=None,
        help="AsciiMath expression to translate ('-' reads from stdin)",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="Convert a .md or .ipynb document to an HTML page instead",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Path to config.yaml (optional)"
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output HTML file path (default: <file>.html, or preview.html with --preview)",
    )
    parser.add_argument(
        "-i",
        "--inline",
        action="store_true",
        help="Emit display=\"inline\" math (default comes from the config)",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent the MathML output")
    parser.add_argument(
        "--xmlns", action="store_true", help="Add the MathML namespace to <math>"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Write an HTML preview page for the expression",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the written HTML page in the browser when done",
    )

    args = parser.parse_args()

    if args.file is None and args.expression is None:
        parser.error("an expression or --file is required")
    if args.file is not None and args.expression is not None:
        parser.error("give either an expression or --file, not both")

    config = load_config(args.config)
    if args.xmlns:
        config.math.xmlns = True

    if args.file is not None:
        if not args.file.exists():
            print(f"Error: '{args.file}' not found.", file=sys.stderr)
            sys.exit(1)
        output_path = args.output or args.file.with_suffix(".html")
        print(f"Converting '{args.file}' …")
        try:
            content_html = Converter(config).convert(args.file)
        except Exception as exc:
            print(f"Conversion failed: {exc}", file=sys.stderr)
            sys.exit(1)
        _write_page(build_page(content_html, title=args.file.stem), output_path, args.open)
        return

    expression = _read_expression(args.expression)
    if len(expression) > config.safety.max_input_chars:
        print(
            f"Error: expression exceeds {config.safety.max_input_chars} characters.",
            file=sys.stderr,
        )
        sys.exit(1)

    inline = args.inline or config.math.display == "inline"
    math = parse(
        expression,
        inline,
        displaystyle=config.math.displaystyle,
        xmlns=config.math.xmlns,
        max_depth=config.safety.max_nesting,
    )

    if args.preview:
        try:
            html = build_preview(expression, math, config.preview)
        except Exception as exc:
            print(f"Preview failed: {exc}", file=sys.stderr)
            sys.exit(1)
        _write_page(html, args.output or Path("preview.html"), args.open)
        return

    markup = pretty(math) if args.pretty else to_string(math)
    if args.output is not None:
        args.output.write_text(markup + "\n", encoding="utf-8")
    else:
        print(markup)


if __name__ == "__main__":
    main()
