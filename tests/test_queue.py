"""
Tests for study queue building and iteration.
"""

import random
from datetime import datetime, timedelta

import pytest

from neuronq.errors import EmptyFilterResult
from neuronq.srs import Grade
from neuronq.study import (
    ALL_FOLDERS,
    EmptyFilterPolicy,
    advance,
    build_queue,
    build_retry_queue,
    current_card,
    fisher_yates_shuffle,
    folders,
    rate_current,
)


def ids(queue):
    return [queue.corpus[i].id for i in queue.order]


class TestBuildQueue:

    def test_without_shuffle_preserves_corpus_order(self, corpus):
        queue = build_queue(corpus)
        assert ids(queue) == [card.id for card in corpus]
        assert queue.cursor == 0
        assert current_card(queue) is corpus[0]

    def test_shuffle_is_permutation(self, corpus, rng):
        queue = build_queue(corpus, shuffle=True, rng=rng)
        assert sorted(queue.order) == list(range(len(corpus)))

    def test_shuffle_changes_order_for_some_seed(self, corpus):
        orders = {tuple(build_queue(corpus, shuffle=True, rng=random.Random(seed)).order) for seed in range(20)}
        assert len(orders) > 1
        assert orders != {tuple(range(len(corpus)))}

    def test_same_seed_same_order(self, corpus):
        first = build_queue(corpus, shuffle=True, rng=random.Random(7))
        second = build_queue(corpus, shuffle=True, rng=random.Random(7))
        assert first.order == second.order

    def test_folder_filter(self, corpus):
        queue = build_queue(corpus, folder_filter="B")
        assert ids(queue) == ["c2", "c3"]

    def test_all_sentinel_skips_folder_filter(self, corpus):
        assert len(build_queue(corpus, folder_filter=ALL_FOLDERS)) == len(corpus)

    def test_due_filter(self, corpus, now):
        corpus[1].next_review_at = now + timedelta(days=2)
        queue = build_queue(corpus, due_only=True, now=now)
        assert "c2" not in ids(queue)
        assert len(queue) == 4


class TestEmptyFilter:

    def test_unknown_folder_raises_by_default(self, corpus):
        with pytest.raises(EmptyFilterResult) as exc_info:
            build_queue(corpus, folder_filter="Z")
        assert exc_info.value.folder == "Z"
        assert exc_info.value.due_only is False

    def test_unknown_folder_fallback_uses_all_cards(self, corpus):
        queue = build_queue(corpus, folder_filter="Z", on_empty=EmptyFilterPolicy.FALLBACK)
        assert len(queue) == len(corpus)
        assert queue.folder == ALL_FOLDERS

    def test_unknown_folder_empty_policy(self, corpus):
        queue = build_queue(corpus, folder_filter="Z", on_empty="empty")
        assert len(queue) == 0
        assert queue.done

    def test_nothing_due_raises(self, corpus, now):
        for card in corpus:
            card.next_review_at = now + timedelta(days=1)
        with pytest.raises(EmptyFilterResult) as exc_info:
            build_queue(corpus, folder_filter="B", due_only=True, now=now)
        assert exc_info.value.folder == "B"
        assert exc_info.value.due_only is True

    def test_nothing_due_fallback_uses_folder_cards(self, corpus, now):
        for card in corpus:
            card.next_review_at = now + timedelta(days=1)
        queue = build_queue(corpus, folder_filter="B", due_only=True, on_empty="fallback", now=now)
        assert ids(queue) == ["c2", "c3"]
        assert queue.due_only is False

    def test_due_filter_with_naive_now(self, corpus, now):
        corpus[1].next_review_at = now + timedelta(days=2)
        queue = build_queue(corpus, due_only=True, now=datetime(2024, 5, 2))
        assert "c2" not in ids(queue)
        assert len(queue) == 4

    def test_policy_from_environment(self, corpus, monkeypatch):
        monkeypatch.setenv("NEURONQ_EMPTY_FILTER_POLICY", "empty")
        assert len(build_queue(corpus, folder_filter="Z")) == 0


class TestAdvance:

    def test_walks_to_end(self, corpus):
        queue = build_queue(corpus)
        seen = [current_card(queue).id]
        while True:
            result = advance(queue)
            if result.done:
                break
            seen.append(result.card.id)
        assert seen == [card.id for card in corpus]
        assert queue.done
        assert current_card(queue) is None

    def test_empty_corpus(self):
        queue = build_queue([])
        assert queue.done
        assert advance(queue).done

    def test_single_card(self, dns_card):
        queue = build_queue([dns_card])
        assert current_card(queue) is dns_card
        assert advance(queue).done


class TestRetryQueue:

    def test_only_missed_cards(self, corpus, now):
        queue = build_queue(corpus)
        rate_current(queue, Grade.AGAIN, now)      # dns
        advance(queue)
        rate_current(queue, Grade.GOOD, now)       # c2
        advance(queue)
        rate_current(queue, Grade.AGAIN, now)      # c3

        retry = build_retry_queue(queue, shuffle=False)
        assert ids(retry) == ["dns", "c3"]

    def test_later_success_forgets_miss(self, corpus, now):
        queue = build_queue(corpus)
        rate_current(queue, Grade.AGAIN, now)
        rate_current(queue, Grade.GOOD, now)
        assert queue.missed == []

    def test_rate_updates_card(self, corpus, now):
        queue = build_queue(corpus)
        event = rate_current(queue, Grade.GOOD, now)
        assert event["card_id"] == "dns"
        assert corpus[0].review_count == 1

    def test_rate_after_pass_is_noop(self):
        queue = build_queue([])
        assert rate_current(queue, Grade.GOOD) is None


def test_fisher_yates_does_not_mutate_input(rng):
    items = [1, 2, 3, 4, 5]
    shuffled = fisher_yates_shuffle(items, rng)
    assert items == [1, 2, 3, 4, 5]
    assert sorted(shuffled) == items


def test_folders(corpus):
    assert folders(corpus) == ["A", "B", "C"]
