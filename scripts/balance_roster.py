#!/usr/bin/env python3
"""
Balance a roster file from the command line.

Usage:
    python scripts/balance_roster.py roster.json <team_size> [seed]

The roster file is a JSON list of players, each with a player_id and any of
the six ratings (defending, goalscoring, stamina_pace, control, teamwork,
resilience).
"""

import json
import sys
import os

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from models.constants import DEFAULT_TEAM_TEMPLATES, Team
from models.errors import BalanceValidationError
from services.team_balance_service import TeamBalanceService


def main():
    if len(sys.argv) < 3:
        print("Usage: python balance_roster.py <roster.json> <team_size> [seed]")
        sys.exit(1)

    roster_file = sys.argv[1]
    team_size = int(sys.argv[2])
    seed = sys.argv[3] if len(sys.argv) > 3 else None

    with open(roster_file, 'r', encoding='utf-8') as f:
        roster = json.load(f)

    print(f"Balancing {len(roster)} players into {team_size}v{team_size}...")

    service = TeamBalanceService(templates=DEFAULT_TEAM_TEMPLATES)
    try:
        result = service.balance(roster, team_size, seed=seed)
    except BalanceValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    names = {p['player_id']: p.get('name') or f"#{p['player_id']}" for p in roster}

    print(f"\n{'='*60}")
    print("BALANCED TEAMS")
    print(f"{'='*60}")
    for team in (Team.A, Team.B):
        print(f"\nTeam {team.value}:")
        for slot in result.team(team):
            print(f"  {slot.slot_number:>3}  {slot.position.value:<11} {names[slot.player_id]}")

    print(f"\nBalance Score: {result.balance_score:.4f} ({result.balance_percentage}% - {result.quality})")
    print(f"Attempts: {result.attempts_used}{' (early exit)' if result.early_exit else ''}")
    if result.diagnostics.is_degraded:
        print(f"Warning: pool of {result.diagnostics.pool_size} for {team_size}v{team_size} "
              f"(expected {result.diagnostics.expected_pool_size})")
    print(f"{'='*60}\n")


if __name__ == '__main__':
    main()
