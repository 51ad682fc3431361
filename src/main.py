import logging
import sys
from typing import List, Optional

from account_writer import write_accounts
from exceptions import TransactionDecodeError, UsageError
from payments_engine import PaymentsEngine
from settings import get_settings

logger = logging.getLogger(__name__)

USAGE = "Usage: payments-engine <input.csv>"


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=settings.log_format,
        stream=sys.stderr,
    )


def parse_args(argv: List[str]) -> str:
    if not argv:
        raise UsageError("Please provide the path to the input CSV file.")
    if len(argv) > 1:
        raise UsageError("Too many arguments provided. Please provide only the path to the input CSV file.")
    return argv[0]


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    args = sys.argv[1:] if argv is None else argv

    try:
        filepath = parse_args(args)
    except UsageError as e:
        print(f"{e}\n{USAGE}", file=sys.stderr)
        return 2

    try:
        accounts = PaymentsEngine().process_file(filepath)
    except (TransactionDecodeError, OSError) as e:
        logger.error(f"Failed to process {filepath}: {e}")
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
