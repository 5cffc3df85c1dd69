"""
Deterministic demonstration dataset.

Demonstration accounts are never stored. Every read calls
generate_demonstration_players(seed), and the same seed always yields
an equal dataset.
"""

import random
from datetime import datetime, timedelta, timezone

from .models import Player, PlayerStats


# (id, name, gamer handle, email)
DEMONSTRATION_ROSTER = [
    ("demo-alex", "Alex Johnson", "alex_striker", "alex@trashfoot.com"),
    ("demo-marcus", "Marcus Reed", "the_wall", "marcus@trashfoot.com"),
    ("demo-jamie", "Jamie Cole", "speed_demon", "jamie@trashfoot.com"),
    ("demo-david", "David Silva", "maestro", "david@trashfoot.com"),
    ("demo-sarah", "Sarah Lee", "rocket", "sarah@trashfoot.com"),
    ("demo-mike", "Mike Turner", "clutch_king", "mike@trashfoot.com"),
]

# Fixed reference point so joined_at does not drift between reads
DEMONSTRATION_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _generate_stats(rng: random.Random) -> PlayerStats:
    wins = rng.randint(0, 20)
    draws = rng.randint(0, 8)
    losses = rng.randint(0, 15)
    played = wins + draws + losses
    form = [rng.choice("WDL") for _ in range(min(5, played))]
    return PlayerStats(
        played=played,
        wins=wins,
        draws=draws,
        losses=losses,
        goals_for=rng.randint(wins, wins * 3 + draws + 1),
        goals_against=rng.randint(losses, losses * 3 + draws + 1),
        clean_sheets=rng.randint(0, wins),
        points=wins * 3 + draws,
        win_rate=round(wins / played * 100, 1) if played else 0.0,
        form=form,
        leagues_won=rng.randint(0, 2),
        knockouts_won=rng.randint(0, 2),
    )


def generate_demonstration_players(seed: int) -> list[Player]:
    """
    Build the demonstration players for a seed.

    Args:
        seed: Seed for the stats generator

    Returns:
        Freshly constructed players; callers may not rely on identity
        across calls, only on equality.
    """
    rng = random.Random(seed)
    players = []
    for player_id, name, handle, email in DEMONSTRATION_ROSTER:
        players.append(
            Player(
                id=player_id,
                email=email,
                name=name,
                gamer_handle=handle,
                joined_at=DEMONSTRATION_EPOCH - timedelta(days=rng.randint(1, 365)),
                stats=_generate_stats(rng),
            )
        )
    return players
