"""
SMS parsing CLI commands.

Runs the classifier and extractor over messages given on the command line or
in a text file (one message per line) and prints the results as JSON.
Nothing is stored.
"""

import json
import sys
from pathlib import Path
from typing import Iterable, List
import structlog

from fintrack.core.config import get_settings
from fintrack.sms.classifier import KeywordClassifier
from fintrack.sms.config import SmsConfig
from fintrack.sms.extractor import TransactionExtractor

logger = structlog.get_logger()


def parse_messages(messages: Iterable[str], config: SmsConfig) -> List[dict]:
    """Classify and extract each message, returning JSON-ready dicts."""
    classifier = KeywordClassifier(config.classifier)
    extractor = TransactionExtractor(config.extractor)

    results = []
    for message in messages:
        is_financial = classifier.is_financial(message)
        record = extractor.extract(message) if is_financial else None
        results.append(
            {
                "message": message,
                "is_financial": is_financial,
                "transaction": record.model_dump(mode="json") if record else None,
            }
        )
    return results


def print_results(results: List[dict]):
    """Pretty print parse results."""
    print(json.dumps(results, indent=2, ensure_ascii=False))
    extracted = sum(1 for r in results if r["transaction"])
    financial = sum(1 for r in results if r["is_financial"])
    print(
        f"\n{len(results)} message(s), {financial} financial, {extracted} extracted",
        file=sys.stderr,
    )


def parse_command(text: str) -> int:
    """Parse a single message."""
    config = SmsConfig.from_settings(get_settings())
    print_results(parse_messages([text], config))
    return 0


def parse_file_command(path: str) -> int:
    """Parse every non-empty line of a file."""
    file_path = Path(path)
    if not file_path.is_file():
        print(f"File not found: {path}")
        return 1

    lines = [line.strip() for line in file_path.read_text(encoding="utf-8").splitlines()]
    config = SmsConfig.from_settings(get_settings())
    print_results(parse_messages([line for line in lines if line], config))
    return 0


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    argv = sys.argv if argv is None else argv
    if len(argv) < 3:
        print("Usage: python -m fintrack.sms.cli <command> <argument>")
        print("\nCommands:")
        print("  parse <text>        Classify and extract one message")
        print("  parse-file <path>   Classify and extract each line of a file")
        print("\nExamples:")
        print('  python -m fintrack.sms.cli parse "Rs.500 debited from A/C XX1234 to John Doe on 12-05-24"')
        print("  python -m fintrack.sms.cli parse-file messages.txt")
        return 1

    command = argv[1]

    try:
        if command == "parse":
            return parse_command(" ".join(argv[2:]))
        elif command == "parse-file":
            return parse_file_command(argv[2])
        else:
            print(f"Unknown command: {command}")
            return 1
    except Exception as e:
        print(f"Error: {str(e)}")
        logger.exception("cli_error", command=command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
