# CFM Doctor Lookup — Command line
# Command-line front end: look up doctors by state, CRM or name and print
# a table or JSON.
import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from cfm import VALID_STATES, CRMQueryError, SearchResult, search
from cfm.config import settings

logger = logging.getLogger("cfm-lookup")

STATUS_LABELS = {
    "regular": "Regular",
    "irregular": "Irregular",
    "suspended": "Suspended",
    "canceled": "Canceled",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfm-lookup",
        description="Query Brazilian doctors through the CFM portal API",
        epilog=(
            "examples:\n"
            "  cfm-lookup -s RS -c 43327\n"
            '  cfm-lookup --state SP --name "João Silva"\n'
            "  cfm-lookup -s RS -c 43327 --json\n\n"
            f"valid states:\n  {', '.join(VALID_STATES)}"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-s", "--state", help="Brazilian state code (required)")
    parser.add_argument("-c", "--crm", help="CRM registration number")
    parser.add_argument("-n", "--name", help="Doctor's name (partial match)")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    return parser


def format_table(result: SearchResult) -> str:
    """Render doctors as a fixed-width table."""
    if not result.doctors:
        return "No doctors found."

    name_width = max(4, *(len(d.name) for d in result.doctors))
    crm_width = max(3, *(len(d.crm) for d in result.doctors))
    specialty_width = max(9, *(len(d.specialty or "-") for d in result.doctors))

    header = " │ ".join([
        "Name".ljust(name_width),
        "CRM".ljust(crm_width),
        "State",
        "Status".ljust(10),
        "Specialty".ljust(specialty_width),
    ])
    separator = "─┼─".join([
        "─" * name_width,
        "─" * crm_width,
        "─" * 5,
        "─" * 10,
        "─" * specialty_width,
    ])

    lines = ["", header, separator]
    for doctor in result.doctors:
        lines.append(" │ ".join([
            doctor.name.ljust(name_width),
            doctor.crm.ljust(crm_width),
            doctor.state.ljust(5),
            STATUS_LABELS.get(doctor.status.value, doctor.status.value).ljust(10),
            (doctor.specialty or "-").ljust(specialty_width),
        ]))
    lines.append("")
    lines.append(f"Found {result.total} doctor(s)")
    return "\n".join(lines)


def setup_logging() -> None:
    # stderr, so --json output on stdout stays machine-readable
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main(argv: Optional[list[str]] = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    if not args.state:
        print("Error: State (-s, --state) is required.", file=sys.stderr)
        print("Run cfm-lookup --help for usage information.", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(search(state=args.state, crm=args.crm, name=args.name))
    except CRMQueryError as e:
        print(f"Error [{e.code.value}]: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_table(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
