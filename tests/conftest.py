import random
from datetime import datetime, timezone

import pytest

from neuronq.schemas import Card
from neuronq.store import CardStore


NEURONQ_ENV_VARS = (
    "NEURONQ_LOG_LEVEL",
    "NEURONQ_QUIZ_SIZE",
    "NEURONQ_EMPTY_FILTER_POLICY",
    "NEURONQ_DEFAULT_FOLDER",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Ignore any NEURONQ_* settings from the developer's shell or .env file."""
    for name in NEURONQ_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def now():
    return datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_card():
    counter = {"n": 0}

    def _make(question="Q", answer="A", folder="B", **fields):
        counter["n"] += 1
        fields.setdefault("id", f"card-{counter['n']}")
        return Card(question=question, answer=answer, folder=folder, **fields)

    return _make


@pytest.fixture
def dns_card():
    return Card(id="dns", question="名前解決に使うプロトコルは？", answer="DNS", folder="A")


@pytest.fixture
def corpus(dns_card):
    """Five cards: the DNS card alone in folder "A", the rest in "B" and "C"."""
    return [
        dns_card,
        Card(id="c2", question="日本の首都は？", answer="東京", folder="B"),
        Card(id="c3", question="1 + 1 は？", answer="2", folder="B"),
        Card(id="c4", question="富士山の高さは？", answer="3776m", folder="C"),
        Card(id="c5", question="水の化学式は？", answer="H2O", folder="C"),
    ]


@pytest.fixture
def store(corpus):
    return CardStore(corpus)
