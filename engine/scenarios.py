"""Training levels and the forced hands that go with them."""

from dataclasses import dataclass, replace
from enum import IntEnum
from random import Random

from engine.cards import Rank, create_shuffled_shoe
from engine.game.round import RoundState, preset_hand, stage_shoe
from engine.rules import RuleSet


class TrainingLevel(IntEnum):
    """Challenge levels; each one steers the deal toward a decision."""

    FUNDAMENTALS = 1
    DOUBLING_DOWN = 2
    SPLITTING_PAIRS = 3
    INSURANCE = 4
    FULL_SIM = 5
    SURRENDER = 6

    @property
    def title(self) -> str:
        return {
            TrainingLevel.FUNDAMENTALS: "Fundamentals",
            TrainingLevel.DOUBLING_DOWN: "Doubling Down",
            TrainingLevel.SPLITTING_PAIRS: "Splitting Pairs",
            TrainingLevel.INSURANCE: "Insurance & Even Money",
            TrainingLevel.FULL_SIM: "Full Sim",
            TrainingLevel.SURRENDER: "Surrender",
        }[self]


# Totals of 9, 10 and 11
DOUBLE_DOWN_HANDS: list[tuple[Rank, Rank]] = [
    (Rank.TWO, Rank.SEVEN),
    (Rank.THREE, Rank.SIX),
    (Rank.FOUR, Rank.FIVE),
    (Rank.TWO, Rank.EIGHT),
    (Rank.THREE, Rank.SEVEN),
    (Rank.FOUR, Rank.SIX),
    (Rank.TWO, Rank.NINE),
    (Rank.THREE, Rank.EIGHT),
    (Rank.FOUR, Rank.SEVEN),
    (Rank.FIVE, Rank.SIX),
]

PAIR_RANKS: list[Rank] = list(Rank)

# (player ranks, dealer up-card)
SURRENDER_HANDS: list[tuple[tuple[Rank, Rank], Rank]] = [
    ((Rank.TEN, Rank.SIX), Rank.NINE),  # 16 vs 9
    ((Rank.NINE, Rank.SEVEN), Rank.TEN),  # 16 vs 10
    ((Rank.TEN, Rank.SIX), Rank.ACE),  # 16 vs A
    ((Rank.TEN, Rank.FIVE), Rank.TEN),  # 15 vs 10
    ((Rank.NINE, Rank.SIX), Rank.TEN),  # 15 vs 10
]


@dataclass(frozen=True)
class Scenario:
    """Ranks to force for one deal; None leaves that part to chance."""

    player_ranks: tuple[Rank, Rank] | None = None
    dealer_up_rank: Rank | None = None


def pick_scenario(level: TrainingLevel, rng: Random) -> Scenario:
    """Choose the forced cards for a deal at ``level``."""
    if level == TrainingLevel.DOUBLING_DOWN:
        return Scenario(player_ranks=rng.choice(DOUBLE_DOWN_HANDS))
    if level == TrainingLevel.SPLITTING_PAIRS:
        rank = rng.choice(PAIR_RANKS)
        return Scenario(player_ranks=(rank, rank))
    if level == TrainingLevel.INSURANCE:
        return Scenario(dealer_up_rank=Rank.ACE)
    if level == TrainingLevel.SURRENDER:
        player_ranks, dealer_rank = rng.choice(SURRENDER_HANDS)
        return Scenario(player_ranks=player_ranks, dealer_up_rank=dealer_rank)
    return Scenario()


def rules_for_level(level: TrainingLevel, base: RuleSet | None = None) -> RuleSet:
    """Insurance and even money only come into play from level 4 on."""
    base = base or RuleSet()
    return replace(base, insurance_allowed=base.insurance_allowed and level >= TrainingLevel.INSURANCE)


def stage_scenario(state: RoundState, level: TrainingLevel, rng: Random | None = None) -> RoundState:
    """
    Prepare the next deal for a training level.

    The trainee (first non-autonomous seat) is handed the forced cards pulled
    from a fresh shoe, the rest of the shoe is shuffled again, and a forced
    dealer up-card is moved to the position the dealer will draw it from.
    """
    rng = rng or Random()
    scenario = pick_scenario(level, rng)
    if scenario == Scenario():
        return state

    shoe = create_shuffled_shoe(rng)
    trainee = next((s for s in state.seats if not s.is_autonomous), None)

    if trainee is not None and scenario.player_ranks is not None:
        cards, rest = shoe.extract(scenario.player_ranks)
        shoe = rest.shuffled(rng)
        state = preset_hand(state, trainee.seat_id, cards)

    if scenario.dealer_up_rank is not None:
        # Everyone without a hand takes two cards before the dealer's up-card
        depth = 2 * sum(1 for s in state.seats if len(s.hand) == 0)
        shoe = shoe.promote(scenario.dealer_up_rank, depth)

    return stage_shoe(state, shoe)
