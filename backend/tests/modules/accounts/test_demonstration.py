from modules.accounts.demonstration import (
    DEMONSTRATION_ROSTER,
    generate_demonstration_players,
)


class TestDemonstrationGenerator:
    def test_same_seed_equal_dataset(self):
        assert generate_demonstration_players(7) == generate_demonstration_players(7)

    def test_different_seed_changes_stats(self):
        a = generate_demonstration_players(1)
        b = generate_demonstration_players(2)
        assert [p.email for p in a] == [p.email for p in b]
        assert [p.stats for p in a] != [p.stats for p in b]

    def test_roster(self):
        players = generate_demonstration_players(0)
        assert [p.id for p in players] == [row[0] for row in DEMONSTRATION_ROSTER]
        assert all(p.email.endswith("@trashfoot.com") for p in players)

    def test_stats_are_consistent(self):
        for player in generate_demonstration_players(42):
            stats = player.stats
            assert stats.played == stats.wins + stats.draws + stats.losses
            assert stats.points == stats.wins * 3 + stats.draws
            assert len(stats.form) <= 5
            assert set(stats.form) <= {"W", "D", "L"}
