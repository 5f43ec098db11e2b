from argparse import ArgumentParser
import json
import logging
import random
import sys

from humanizer import __version__
from humanizer.data.corpus import load_corpus, score_corpus, summarize, write_scores
from humanizer.options import HumanizationLevel, WritingMode
from humanizer.rewrite.diff import SegmentKind, render_changes
from humanizer.rewrite.rules import humanize
from humanizer.text.diagnosis import analyze

logger = logging.getLogger(__name__)

# ANSI green for text added by a rewrite.
ADDED_STYLE = "\033[32m{}\033[0m"


def main(argv=None):
    parser = ArgumentParser(
        prog="humanizer",
        description="Offline heuristics for scoring AI-sounding text and rewriting it to read more naturally.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Score text for AI-likelihood and readability",
    )
    analyze_parser.add_argument(
        "text",
        nargs="?",
        help="Text to analyze (reads from stdin if not provided)",
    )
    analyze_parser.add_argument(
        "-f",
        "--file",
        type=str,
        help="Path to input text file",
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    analyze_parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random suggestion backfill",
    )

    # humanize command
    humanize_parser = subparsers.add_parser(
        "humanize",
        help="Rewrite text toward a more natural register",
    )
    humanize_parser.add_argument(
        "text",
        nargs="?",
        help="Text to humanize (reads from stdin if not provided)",
    )
    humanize_parser.add_argument(
        "-f",
        "--file",
        type=str,
        help="Path to input text file",
    )
    humanize_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path (writes to stdout if not provided)",
    )
    humanize_parser.add_argument(
        "--level",
        choices=[level.value for level in HumanizationLevel],
        default=HumanizationLevel.MEDIUM.value,
        help="Rewrite intensity (default: Medium)",
    )
    humanize_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in WritingMode],
        default=WritingMode.GENERAL.value,
        help="Target register (default: General)",
    )
    humanize_parser.add_argument(
        "--seed",
        type=int,
        help="Seed for reproducible rewrites",
    )
    humanize_parser.add_argument(
        "--diff",
        action="store_true",
        help="Highlight added words when writing to a terminal",
    )

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Show which words of a rewrite are new",
    )
    diff_parser.add_argument("original", help="Path to the original text file")
    diff_parser.add_argument("rewritten", help="Path to the rewritten text file")

    # score-corpus command
    corpus_parser = subparsers.add_parser(
        "score-corpus",
        help="Score every row of a Parquet, CSV or NDJSON corpus",
    )
    corpus_parser.add_argument("input", help="Path to the corpus file")
    corpus_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Where to write the scored corpus (.parquet or .csv)",
    )
    corpus_parser.add_argument(
        "--column",
        default="text",
        help="Name of the text column (default: text)",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.command == "analyze":
        handle_analyze(args)
    elif args.command == "humanize":
        handle_humanize(args)
    elif args.command == "diff":
        handle_diff(args)
    elif args.command == "score-corpus":
        handle_score_corpus(args)
    elif args.command == "version":
        handle_version()


def handle_version():
    """Display version information."""
    print(f"humanizer version {__version__}")


def read_file(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Could not read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def read_input(args):
    """Get input text from a file, the positional argument, or stdin."""
    if args.file:
        return read_file(args.file)
    if args.text:
        return args.text
    return sys.stdin.read()


def make_rng(seed):
    return random.Random(seed) if seed is not None else None


def format_changes(segments, color):
    parts = []
    for segment in segments:
        if color and segment.kind == SegmentKind.ADDED:
            parts.append(ADDED_STYLE.format(segment.text))
        else:
            parts.append(segment.text)
    return "".join(parts)


def handle_analyze(args):
    """Score the input text and print the result."""
    result = analyze(read_input(args), rng=make_rng(args.seed))

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    lines = ["Text Analysis", "=" * 50]
    lines.append(f"AI Score: {result.ai_score}")
    lines.append(f"Readability: {result.readability_score}")
    lines.append(f"Words: {result.word_count}  Sentences: {result.sentence_count}")
    if result.flagged_phrases:
        lines.append("Flagged: " + ", ".join(p.phrase for p in result.flagged_phrases))
    if result.suggestions:
        lines.append("Suggestions:")
        lines.extend(f"  - {s}" for s in result.suggestions)
    print("\n".join(lines))


def handle_humanize(args):
    """Process text humanization request."""
    text = read_input(args)
    result = humanize(
        text,
        HumanizationLevel(args.level),
        WritingMode(args.mode),
        rng=make_rng(args.seed),
    )

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
        except IOError as e:
            print(f"Error writing to file: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.diff:
        print(format_changes(render_changes(text, result), sys.stdout.isatty()), end="")
    else:
        # Print only the final output text to stdout
        print(result, end="")


def handle_diff(args):
    original = read_file(args.original)
    rewritten = read_file(args.rewritten)
    print(format_changes(render_changes(original, rewritten), sys.stdout.isatty()), end="")


def handle_score_corpus(args):
    """Score a corpus file and print distribution statistics."""
    try:
        df = load_corpus(args.input, column=args.column)
        scored = score_corpus(df, column=args.column)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: Invalid corpus file: {args.input}\nDetails: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        try:
            write_scores(scored, args.output)
        except OSError as e:
            print(f"Error writing to file: {e}", file=sys.stderr)
            sys.exit(1)

    print(f"Scored {len(scored)} rows")
    if len(scored) == 0:
        return
    for field, stats in summarize(scored).items():
        print(
            f"  {field:<26} min {stats['min']:>8.2f}  median {stats['median']:>8.2f}"
            f"  mean {stats['mean']:>8.2f}  max {stats['max']:>8.2f}"
        )


if __name__ == "__main__":
    main()
