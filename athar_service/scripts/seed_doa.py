from __future__ import annotations

import asyncio
from argparse import Namespace

from athar_service.core.settings import Settings
from athar_service.scripts.common import base_parser, open_importer, print_reports


def parse_args() -> Namespace:
    parser = base_parser(
        "Import doa from equran.id. Run: python -m athar_service.scripts.seed_doa",
        default_delay_ms=100,
    )
    parser.add_argument("--start", type=int, default=1, help="First doa id")
    parser.add_argument(
        "--max-id",
        type=int,
        default=None,
        help="Highest doa id to try (defaults to DOA_MAX_ID)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    max_id = args.max_id or Settings().DOA_MAX_ID

    async def runner() -> int:
        async with open_importer(args.delay_ms) as importer:
            report = await importer.import_doa(args.start, max_id)
        return print_reports([report])

    raise SystemExit(asyncio.run(runner()))


if __name__ == "__main__":
    main()
