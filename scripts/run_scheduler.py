"""
Command-line entry point: generate a round-robin season for one division.
"""

import sys
import argparse
from datetime import datetime
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.exceptions import SchedulingError
from app.core.logging_config import setup_logging
from app.models import Gender, parse_datetime
from app.services.round_robin import bye_teams_by_round
from app.services.scheduler import ScheduleAssembler
from app.services.supabase_store import SupabaseStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Intramural Scheduling - Generate a round-robin season for a division'
    )
    parser.add_argument('--sport-id', type=int, required=True, help='Sport the division belongs to')
    parser.add_argument('--division', required=True, help='Division name, e.g. recreational')
    parser.add_argument('--start-date', type=parse_datetime, required=True,
                        help='First game date (ISO format, e.g. 2025-07-01)')
    parser.add_argument('--games-per-week', type=int, default=2, help='Games per weekly bucket')
    parser.add_argument('--venue', default=None, help='Venue for every game (default TBD)')
    parser.add_argument('--gender', choices=[g.value for g in Gender], default=None,
                        help='Only schedule teams of this gender category')
    parser.add_argument('--dry-run', action='store_true', help='Print the schedule without saving it')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging()

    print("\n" + "=" * 80)
    print("INTRAMURAL ROUND-ROBIN SCHEDULER")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    gender = Gender(args.gender) if args.gender else None

    try:
        store = SupabaseStore()
        assembler = ScheduleAssembler(store)
        result = assembler.generate_schedule(
            sport_id=args.sport_id,
            division=args.division,
            start_date=args.start_date,
            games_per_week=args.games_per_week,
            venue=args.venue,
            gender=gender,
            dry_run=args.dry_run
        )
    except SchedulingError as e:
        print(f"\nERROR: {e.message}")
        return 1

    print(f"\n{result.message}")

    if args.dry_run:
        teams = {team.id: team for team in store.fetch_teams(args.sport_id, args.division, gender)}
        for record in result.records:
            home = teams[record.home_team_id].name
            away = teams[record.away_team_id].name
            print(f"  {record.scheduled_at:%Y-%m-%d}  {away} @ {home}  ({record.venue})")

        for round_number, byes in enumerate(bye_teams_by_round(list(teams.values())), start=1):
            if byes:
                print(f"  Round {round_number} bye: {', '.join(team.name for team in byes)}")
    elif result.validation:
        summary = result.validation.get_summary()
        print(f"Hard violations: {summary['hard_violations']}")
        print(f"Soft violations: {summary['soft_violations']}")

    print("=" * 80)
    return 0


if __name__ == '__main__':
    sys.exit(main())
