from collections import Counter

import pytest

from giveaway_system.draw import select_winners


def test_draws_requested_number_without_duplicates():
    participants = list(range(1, 51))
    winners = select_winners(participants, 5)
    assert len(winners) == 5
    assert len(set(winners)) == 5
    assert set(winners) <= set(participants)


def test_fewer_participants_than_winners_returns_everyone():
    assert select_winners([7], 2) == [7]
    assert select_winners([3, 1, 2], 3) == [3, 1, 2]


def test_no_participants_means_no_winners():
    assert select_winners([], 3) == []


def test_input_is_not_modified():
    participants = [1, 2, 3, 4, 5]
    select_winners(participants, 2)
    assert participants == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("count", [0, -1])
def test_winners_count_must_be_positive(count):
    with pytest.raises(ValueError):
        select_winners([1, 2, 3], count)


def test_every_participant_equally_likely():
    participants = list(range(10))
    trials = 20000
    counts = Counter()
    for _ in range(trials):
        counts.update(select_winners(participants, 1))

    # Expected 2000 each, standard deviation ~42
    assert set(counts) == set(participants)
    for participant in participants:
        assert 1700 < counts[participant] < 2300
