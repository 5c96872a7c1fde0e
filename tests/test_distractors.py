"""
Tests for distractor generation.
"""

import random

import pytest

from neuronq.quiz import (
    DEFAULT_CATEGORIES,
    DistractorCategory,
    category_by_name,
    generate_distractors,
    matching_categories,
)
from neuronq.schemas import Card


PROTOCOLS = category_by_name("protocols")


class TestCategoryStage:

    def test_protocol_question_uses_protocol_pool(self, dns_card, corpus, rng):
        distractors = generate_distractors(dns_card, corpus, 3, rng)
        assert len(distractors) == 3
        assert all(d in PROTOCOLS.pool for d in distractors)

    def test_trigger_matching_ignores_case(self):
        card = Card(id="x", question="Which layer does TCP live in?", answer="Transport")
        names = [category.name for category in matching_categories(card)]
        assert "protocols" in names

    def test_answer_text_can_trigger(self):
        card = Card(id="x", question="?", answer="OSPF")
        assert PROTOCOLS in matching_categories(card)

    def test_custom_table(self, corpus, rng):
        colours = DistractorCategory(name="colours", triggers=("colour",), pool=("Red", "Green", "Blue", "red"))
        card = Card(id="x", question="Favourite colour?", answer="BLUE", folder="Z")
        distractors = generate_distractors(card, corpus, 3, rng, categories=[colours])
        # "red" duplicates "Red"; the third option comes from the corpus
        assert sorted(distractors[:2]) == ["Green", "Red"]
        assert len(distractors) == 3
        assert distractors[2] in {c.answer for c in corpus}


class TestFallbackStages:

    def test_same_folder_before_other_folders(self, make_card, rng):
        target = make_card(question="富士山", answer="山", folder="geo")
        same = [make_card(answer=f"geo-{i}", folder="geo") for i in range(3)]
        other = [make_card(answer=f"other-{i}", folder="misc") for i in range(3)]
        corpus = [target] + other + same

        distractors = generate_distractors(target, corpus, 3, rng)
        assert sorted(distractors) == ["geo-0", "geo-1", "geo-2"]

    def test_cross_folder_fills_the_rest(self, make_card, rng):
        target = make_card(question="富士山", answer="山", folder="geo")
        corpus = [
            target,
            make_card(answer="川", folder="geo"),
            make_card(answer="海", folder="misc"),
            make_card(answer="空", folder="misc"),
        ]
        distractors = generate_distractors(target, corpus, 3, rng)
        assert distractors[0] == "川"
        assert sorted(distractors[1:]) == ["海", "空"]

    def test_short_result_when_corpus_runs_dry(self, make_card, rng):
        target = make_card(question="富士山", answer="山")
        corpus = [target, make_card(answer="川")]
        assert generate_distractors(target, corpus, 3, rng) == ["川"]

    def test_no_candidates(self, make_card, rng):
        target = make_card(question="富士山", answer="山")
        assert generate_distractors(target, [target], 3, rng) == []


class TestExclusions:

    def test_never_returns_correct_answer_any_case(self, make_card, rng):
        target = make_card(question="富士山", answer="Mountain")
        corpus = [
            target,
            make_card(answer="mountain"),
            make_card(answer=" MOUNTAIN "),
            make_card(answer="River"),
        ]
        assert generate_distractors(target, corpus, 3, rng) == ["River"]

    def test_no_duplicates_across_stages(self, make_card, rng):
        target = make_card(question="使うプロトコルは？", answer="DNS", folder="net")
        corpus = [target] + [make_card(answer=a, folder="net") for a in ("tcp", "UDP", "Http", "FTP")]
        distractors = generate_distractors(target, corpus, 40, rng)
        lowered = [d.lower() for d in distractors]
        assert len(lowered) == len(set(lowered))
        assert "dns" not in lowered

    @pytest.mark.parametrize("seed", range(10))
    def test_properties_hold_for_any_seed(self, dns_card, corpus, seed):
        distractors = generate_distractors(dns_card, corpus, 3, random.Random(seed))
        lowered = [d.lower() for d in distractors]
        assert "dns" not in lowered
        assert len(set(lowered)) == len(lowered) == 3


def test_zero_count(dns_card, corpus):
    assert generate_distractors(dns_card, corpus, 0) == []


def test_default_table_has_every_topic():
    assert len(DEFAULT_CATEGORIES) == 27
    assert len({category.name for category in DEFAULT_CATEGORIES}) == 27
