#!/usr/bin/env python3
import argparse
import logging
import sys
import os
from typing import Optional, List, TextIO

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from diffcore import ComparisonOptions, DiffEngine
from formatters import FormatterConfig, FormatterFactory, ThreeWayFormatter
from formatters.base import ColorScheme
from linesource import DirectoryComparator, read_file_lines

__version__ = '1.0.0'

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


class ColorPrinter:
    def __init__(self, use_color: bool = True, output: Optional[TextIO] = None):
        self.use_color = use_color
        self.output = output or sys.stdout
        self.colors = ColorScheme() if use_color else ColorScheme.no_color()

    def print(self, text: str, end: str = '\n'):
        self.output.write(text + end)

    def print_added(self, text: str):
        self.print(f"{self.colors.green}{text}{self.colors.reset}")

    def print_removed(self, text: str):
        self.print(f"{self.colors.red}{text}{self.colors.reset}")

    def print_modified(self, text: str):
        self.print(f"{self.colors.yellow}{text}{self.colors.reset}")

    def print_header(self, text: str):
        self.print(f"{self.colors.bold}{text}{self.colors.reset}")

    def print_error(self, text: str):
        sys.stderr.write(f"{self.colors.red}Error: {text}{self.colors.reset}\n")


class CLIApplication:
    def __init__(self):
        self.parser = self._create_parser()
        self.printer: Optional[ColorPrinter] = None

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='cleandiff',
            description='Compare files line by line, or merge-check them against a common base',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='''
Examples:
  %(prog)s file1.txt file2.txt
  %(prog)s -y file1.txt file2.txt
  %(prog)s --ignore-whitespace --ignore-blank-lines old.py new.py
  %(prog)s --base base.txt mine.txt theirs.txt
  %(prog)s -r dir1 dir2
            '''
        )
        parser.add_argument('file1', help='First (left) file or directory')
        parser.add_argument('file2', help='Second (right) file or directory')
        parser.add_argument(
            '--base',
            metavar='FILE',
            help='Common ancestor; compare FILE1 and FILE2 against it three ways'
        )
        format_group = parser.add_mutually_exclusive_group()
        format_group.add_argument(
            '-u', '--unified',
            action='store_true',
            default=True,
            help='Output unified diff (default)'
        )
        format_group.add_argument(
            '-y', '--side-by-side',
            action='store_true',
            help='Output side-by-side diff'
        )
        format_group.add_argument(
            '--html',
            action='store_true',
            help='Output HTML diff'
        )
        format_group.add_argument(
            '--json',
            action='store_true',
            help='Output the chunks as JSON'
        )
        format_group.add_argument(
            '-s', '--simple',
            action='store_true',
            help='Output simple diff'
        )
        format_group.add_argument(
            '--normal',
            action='store_true',
            help='Output normal (ed-style) diff'
        )
        parser.add_argument(
            '-c', '--context',
            type=int,
            default=3,
            metavar='NUM',
            help='Number of context lines (default: 3)'
        )
        parser.add_argument(
            '-w', '--width',
            type=int,
            default=130,
            metavar='NUM',
            help='Output width for side-by-side (default: 130)'
        )
        parser.add_argument(
            '-r', '--recursive',
            action='store_true',
            help='Recursively compare directories'
        )
        parser.add_argument(
            '-q', '--quiet',
            action='store_true',
            help='Report only whether files differ'
        )
        parser.add_argument(
            '--no-color',
            action='store_true',
            help='Disable colored output'
        )
        parser.add_argument(
            '-o', '--output',
            type=str,
            metavar='FILE',
            help='Write output to file'
        )
        parser.add_argument(
            '--ignore-whitespace',
            action='store_true',
            help='Ignore leading and trailing whitespace'
        )
        parser.add_argument(
            '--ignore-case',
            action='store_true',
            help='Ignore case differences'
        )
        parser.add_argument(
            '--ignore-blank-lines',
            action='store_true',
            help='Ignore lines that are empty or whitespace only'
        )
        parser.add_argument(
            '--linear',
            action='store_true',
            help='Use the linear-space algorithm (for very large inputs)'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Log debug information to stderr'
        )
        parser.add_argument(
            '-v', '--version',
            action='version',
            version=f'%(prog)s {__version__}'
        )
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        setup_logging(args.verbose)
        output_file = None
        if args.output:
            try:
                output_file = open(args.output, 'w', encoding='utf-8')
            except OSError as e:
                ColorPrinter(use_color=False).print_error(str(e))
                return 2
            self.printer = ColorPrinter(use_color=False, output=output_file)
        else:
            self.printer = ColorPrinter(use_color=not args.no_color and sys.stdout.isatty())
        try:
            result = self._execute(args)
        except KeyboardInterrupt:
            self.printer.print_error("Interrupted")
            result = 130
        except (OSError, ValueError) as e:
            logger.debug("comparison failed", exc_info=True)
            self.printer.print_error(str(e))
            result = 2
        finally:
            if output_file is not None:
                output_file.close()
        return result

    def _options(self, args) -> ComparisonOptions:
        return ComparisonOptions.from_flags(
            ignore_whitespace=args.ignore_whitespace,
            ignore_case=args.ignore_case,
            ignore_blank_lines=args.ignore_blank_lines,
        )

    def _formatter_config(self, args) -> FormatterConfig:
        return FormatterConfig(context_lines=args.context, width=args.width,
                               use_color=self.printer.use_color)

    def _formatter_name(self, args) -> str:
        if args.side_by_side:
            return 'side-by-side'
        if args.html:
            return 'html'
        if args.json:
            return 'json'
        if args.simple:
            return 'simple'
        if args.normal:
            return 'normal'
        return 'unified'

    def _execute(self, args) -> int:
        file1 = args.file1
        file2 = args.file2
        for path in (file1, file2, args.base):
            if path is not None and not os.path.exists(path):
                self.printer.print_error(f"File not found: {path}")
                return 2
        engine = DiffEngine(self._options(args), use_linear_space=args.linear)
        if args.base is not None:
            return self._merge_check(args, engine, args.base, file1, file2)
        if args.recursive and os.path.isdir(file1) and os.path.isdir(file2):
            return self._compare_directories(args, file1, file2)
        if os.path.isdir(file1) or os.path.isdir(file2):
            self.printer.print_error("Cannot compare directory with file. Use -r for directories.")
            return 2
        return self._compare_files(args, engine, file1, file2)

    def _compare_files(self, args, engine: DiffEngine, file1: str, file2: str) -> int:
        result = engine.diff(read_file_lines(file1), read_file_lines(file2))
        if args.quiet:
            if result.has_changes:
                self.printer.print(f"Files {file1} and {file2} differ")
            return 1 if result.has_changes else 0
        formatter = FormatterFactory.create(self._formatter_name(args), self._formatter_config(args))
        if result.has_changes or args.json or args.html or args.side_by_side:
            formatter.format(result, file1, file2, output=self.printer.output)
        return 1 if result.has_changes else 0

    def _merge_check(self, args, engine: DiffEngine, base: str, left: str, right: str) -> int:
        result = engine.diff3(read_file_lines(base), read_file_lines(left), read_file_lines(right))
        if args.quiet:
            if result.has_conflicts:
                self.printer.print(f"{result.conflict_count} conflicting lines between {left} and {right}")
            return 1 if result.has_conflicts else 0
        formatter = ThreeWayFormatter(self._formatter_config(args))
        formatter.format(result, base, left, right, output=self.printer.output)
        return 1 if result.has_conflicts else 0

    def _compare_directories(self, args, dir1: str, dir2: str) -> int:
        comparator = DirectoryComparator(dir1, dir2, options=self._options(args))
        result = comparator.compare()
        has_changes = bool(result['only_in_first'] or result['only_in_second'] or result['modified'])
        if args.quiet:
            return 1 if has_changes else 0
        if result['only_in_first']:
            self.printer.print_header(f"Only in {dir1}:")
            for f in result['only_in_first']:
                self.printer.print_removed(f"  {f}")
        if result['only_in_second']:
            self.printer.print_header(f"Only in {dir2}:")
            for f in result['only_in_second']:
                self.printer.print_added(f"  {f}")
        if result['modified']:
            self.printer.print_header("Modified files:")
            engine = DiffEngine(self._options(args), use_linear_space=args.linear)
            for f in result['modified']:
                self.printer.print_modified(f"  {f}")
                f1 = os.path.join(dir1, f)
                f2 = os.path.join(dir2, f)
                try:
                    self._compare_files(args, engine, f1, f2)
                except ValueError as e:
                    self.printer.print(f"  {e}")
        return 1 if has_changes else 0


def main(argv: Optional[List[str]] = None) -> int:
    app = CLIApplication()
    return app.run(argv)


if __name__ == '__main__':
    sys.exit(main())
