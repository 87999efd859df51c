"""
Vote Sub-protocol - Vote cards and the tally.

Every player holds the same eight cards. Yes and no cards add their
weight to their side. Each joker then adds JOKER_BONUS to whichever side
is not ahead at that moment (a tie counts as "not ahead" for yes), one
joker at a time. The question card counts for nothing and is never used up.
A placement is approved only on a strict yes majority.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .state import Vote, VoteCard, VoteCardKind


JOKER_BONUS = 2


def create_vote_cards() -> tuple[VoteCard, ...]:
    """The fixed eight-card hand each player votes with."""
    return (
        VoteCard(card_id="ja-1", kind=VoteCardKind.YES, weight=1, label="YES!"),
        VoteCard(card_id="jaa-1", kind=VoteCardKind.YES, weight=2, label="YES!!"),
        VoteCard(card_id="jaaa-1", kind=VoteCardKind.YES, weight=3, label="YES!!!"),
        VoteCard(card_id="ne-1", kind=VoteCardKind.NO, weight=1, label="NO!"),
        VoteCard(card_id="nee-1", kind=VoteCardKind.NO, weight=2, label="NO!!"),
        VoteCard(card_id="neee-1", kind=VoteCardKind.NO, weight=3, label="NO!!!"),
        VoteCard(card_id="jeeiin-1", kind=VoteCardKind.JOKER, weight=2, label="JOKER"),
        VoteCard(card_id="question-1", kind=VoteCardKind.QUESTION, weight=0, label="?"),
    )


@dataclass(frozen=True)
class VoteTally:
    yes_total: int
    no_total: int

    @property
    def approved(self) -> bool:
        return self.yes_total > self.no_total


def tally_votes(votes: Iterable[Vote]) -> VoteTally:
    votes = list(votes)
    yes_total = sum(v.card.weight for v in votes if v.card.kind == VoteCardKind.YES)
    no_total = sum(v.card.weight for v in votes if v.card.kind == VoteCardKind.NO)

    for vote in votes:
        if vote.card.kind != VoteCardKind.JOKER:
            continue
        if yes_total > no_total:
            no_total += JOKER_BONUS
        else:
            yes_total += JOKER_BONUS

    return VoteTally(yes_total=yes_total, no_total=no_total)
