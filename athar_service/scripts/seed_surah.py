from __future__ import annotations

import asyncio
from argparse import Namespace

from athar_service.data.juz_mapping import TOTAL_SURAHS
from athar_service.scripts.common import base_parser, open_importer, print_reports


def parse_args() -> Namespace:
    parser = base_parser(
        "Import surahs and verses from equran.id. "
        "Run: python -m athar_service.scripts.seed_surah",
        default_delay_ms=200,
    )
    parser.add_argument("--start", type=int, default=1, help="First surah number")
    parser.add_argument("--end", type=int, default=TOTAL_SURAHS, help="Last surah number")
    args = parser.parse_args()
    if not 1 <= args.start <= args.end <= TOTAL_SURAHS:
        parser.error(f"--start/--end must satisfy 1 <= start <= end <= {TOTAL_SURAHS}")
    return args


def main() -> None:
    args = parse_args()

    async def runner() -> int:
        async with open_importer(args.delay_ms) as importer:
            reports = await importer.import_surahs(args.start, args.end)
        return print_reports(reports)

    raise SystemExit(asyncio.run(runner()))


if __name__ == "__main__":
    main()
