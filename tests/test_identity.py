import pytest

from waiverwire.identity import (
    Canonicalizer,
    IdentityResolver,
    PlayerMetadata,
    ResolutionOutcome,
    select_canonical_player,
)
from waiverwire.models import PlayerIdentity


def _player(native_id: str, name: str, team: str | None = None, **kwargs) -> PlayerIdentity:
    return PlayerIdentity(native_id=native_id, full_name=name, team=team, **kwargs)


class RecordingCanonicalizer(Canonicalizer):
    def __init__(self, mapping=None):
        super().__init__(mapping)
        self.calls: list[str] = []

    def get_canonical_native_id(self, foreign_id):
        self.calls.append(foreign_id)
        return super().get_canonical_native_id(foreign_id)


def test_fallback_resolves_when_canonical_table_misses():
    universe = {"n1": _player("n1", "J. Smith", "KC")}
    resolver = IdentityResolver(Canonicalizer(), universe)

    resolution = resolver.resolve_outcome("999", PlayerMetadata(full_name="J. Smith", team="KC"))

    assert resolution.native_id == "n1"
    assert resolution.outcome is ResolutionOutcome.FALLBACK
    assert resolver.resolve("999", PlayerMetadata(full_name="J. Smith", team="KC")) == "n1"


def test_canonical_hit_takes_precedence_over_fallback():
    universe = {
        "n1": _player("n1", "J. Smith", "KC"),
        "n2": _player("n2", "Other Guy", "BUF"),
    }
    resolver = IdentityResolver(Canonicalizer({"999": "n2"}), universe)

    resolution = resolver.resolve_outcome("999", PlayerMetadata(full_name="J. Smith", team="KC"))

    assert resolution.native_id == "n2"
    assert resolution.outcome is ResolutionOutcome.CANONICAL


def test_canonical_mapping_equal_to_foreign_id_is_a_hit():
    resolver = IdentityResolver(Canonicalizer({"123": "123"}), {})

    assert resolver.resolve_outcome("123").outcome is ResolutionOutcome.CANONICAL
    assert resolver.resolve("123") == "123"


def test_fallback_never_crosses_team_codes():
    universe = {"n1": _player("n1", "Mike Williams", "NYJ")}
    resolver = IdentityResolver(Canonicalizer(), universe)

    assert resolver.resolve("55", PlayerMetadata(full_name="Mike Williams", team="PIT")) is None


def test_fallback_matches_normalized_name_and_team_alias():
    universe = {"n7": _player("n7", "Terry McLaurin", "WAS")}
    resolver = IdentityResolver(Canonicalizer(), universe)

    resolution = resolver.resolve_outcome("3121422", PlayerMetadata(full_name="terry mclaurin", team="wsh"))

    assert resolution.native_id == "n7"
    assert resolution.outcome is ResolutionOutcome.FALLBACK


def test_fallback_handles_suffix_differences():
    universe = {"9509": _player("9509", "Marvin Harrison", "ARI")}
    resolver = IdentityResolver(Canonicalizer(), universe)

    assert resolver.resolve("4432708", PlayerMetadata(full_name="Marvin Harrison Jr.", team="ARI")) == "9509"


@pytest.mark.parametrize(
    "metadata",
    [
        None,
        PlayerMetadata(),
        PlayerMetadata(full_name="J. Smith"),
        PlayerMetadata(team="KC"),
        PlayerMetadata(full_name="...", team="KC"),
    ],
)
def test_missing_metadata_disables_fallback(metadata):
    universe = {"n1": _player("n1", "J. Smith", "KC")}
    resolver = IdentityResolver(Canonicalizer(), universe)

    resolution = resolver.resolve_outcome("999", metadata)

    assert resolution.native_id is None
    assert resolution.outcome is ResolutionOutcome.MISS


def test_fallback_ignores_free_agents_without_team():
    universe = {"n1": _player("n1", "J. Smith", None)}
    resolver = IdentityResolver(Canonicalizer(), universe)

    assert resolver.resolve("999", PlayerMetadata(full_name="J. Smith", team="KC")) is None


def test_duplicate_name_and_team_resolves_to_lowest_native_id():
    players = [
        _player("300", "Josh Allen", "BUF"),
        _player("200", "Josh Allen", "BUF"),
        _player("250", "Josh Allen", "JAX"),
    ]
    forward = IdentityResolver(Canonicalizer(), players)
    backward = IdentityResolver(Canonicalizer(), list(reversed(players)))

    metadata = PlayerMetadata(full_name="Josh Allen", team="BUF")
    assert forward.resolve("1", metadata) == "200"
    assert backward.resolve("1", metadata) == "200"


def test_resolver_consults_canonicalizer_once_per_call():
    canonicalizer = RecordingCanonicalizer({"1": "a"})
    resolver = IdentityResolver(canonicalizer, {})

    resolver.resolve("1")
    resolver.resolve("2")

    assert canonicalizer.calls == ["1", "2"]


def test_select_canonical_player_preference_order():
    inactive_top = _player("1", "A", "KC", status="Inactive", search_rank=1)
    active_low = _player("2", "A", "KC", status="Active", search_rank=400)
    active_high = _player("3", "A", "KC", status="Active", search_rank=10)
    active_high_no_team = _player("0", "A", None, status="Active", search_rank=10)

    assert select_canonical_player([inactive_top, active_low]) == active_low
    assert select_canonical_player([active_low, active_high]) == active_high
    assert select_canonical_player([active_high_no_team, active_high]) == active_high


def test_select_canonical_player_rejects_empty():
    with pytest.raises(ValueError):
        select_canonical_player([])


def test_canonicalizer_from_players_collapses_duplicate_records():
    players = [
        _player("4046", "Patrick Mahomes", "KC", position="QB", foreign_id="3139477", status="Active", search_rank=5),
        _player("9999", "Patrick Mahomes II", None, position="QB", foreign_id="3139478", status="Inactive"),
        _player("6794", "Justin Jefferson", "MIN", position="WR", foreign_id="4262921", status="Active"),
        _player("1111", "No Espn", "MIN", position="WR"),
    ]

    canonicalizer = Canonicalizer.from_players(players)

    assert canonicalizer.get_canonical_native_id("3139477") == "4046"
    assert canonicalizer.get_canonical_native_id("3139478") == "4046"
    assert canonicalizer.get_canonical_native_id("4262921") == "6794"
    assert canonicalizer.get_canonical_native_id("0") is None
    assert len(canonicalizer) == 3
    assert canonicalizer.duplicates_resolved == 1


def test_canonicalizer_keeps_same_name_different_positions_apart():
    players = [
        _player("10", "Mike Williams", "NYJ", position="WR", foreign_id="100", status="Active"),
        _player("20", "Mike Williams", "LAC", position="TE", foreign_id="200", status="Active"),
    ]

    canonicalizer = Canonicalizer.from_players(players)

    assert canonicalizer.as_dict() == {"100": "10", "200": "20"}
    assert canonicalizer.duplicates_resolved == 0


def test_canonicalizer_shared_foreign_id_goes_to_preferred_record():
    players = [
        _player("10", "Alpha One", "NYJ", position="WR", foreign_id="500", status="Inactive"),
        _player("20", "Beta Two", "LAC", position="RB", foreign_id="500", status="Active"),
    ]

    canonicalizer = Canonicalizer.from_players(players)

    assert canonicalizer.get_canonical_native_id("500") == "20"
    assert canonicalizer.duplicates_resolved == 1
