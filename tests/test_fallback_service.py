import random

import pytest

from yako.services.fallback_service import (
    ALL_REPLIES,
    GENERIC_REPLIES,
    GOODBYE_REPLY,
    GREETING_REPLY,
    HELP_REPLY,
    HOWAREYOU_REPLY,
    NAME_REPLY,
    FallbackGenerator,
)


class IndexedChoice:
    """Random source stub that always picks a fixed position."""

    def __init__(self, index):
        self.index = index

    def choice(self, seq):
        return seq[self.index]


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Hello there", GREETING_REPLY),
        ("hi!", GREETING_REPLY),
        ("How are you today?", HOWAREYOU_REPLY),
        ("What is your name?", NAME_REPLY),
        ("I need some help", HELP_REPLY),
        ("ok bye", GOODBYE_REPLY),
        ("Goodbye for now", GOODBYE_REPLY),
    ],
)
def test_keyword_replies(message, expected):
    assert FallbackGenerator().reply(message) == expected


def test_keyword_order_greeting_first():
    assert FallbackGenerator().reply("hi, how are you?") == GREETING_REPLY


def test_keywords_match_inside_words():
    gen = FallbackGenerator(rng=IndexedChoice(0))
    assert gen.reply("this thing") == GREETING_REPLY
    assert gen.reply("read the byelaws") == GOODBYE_REPLY


def test_generic_pool_is_covered_by_injected_rng():
    picked = {FallbackGenerator(rng=IndexedChoice(i)).reply("the weather is odd") for i in range(8)}
    assert picked == set(GENERIC_REPLIES)
    assert len(GENERIC_REPLIES) == 8


def test_seeded_rng_is_deterministic():
    a = [FallbackGenerator(rng=random.Random(3)).reply("random musings") for _ in range(5)]
    b = [FallbackGenerator(rng=random.Random(3)).reply("random musings") for _ in range(5)]
    assert a == b


@pytest.mark.parametrize("message", ["", "something unusual", "42", "¿qué?"])
def test_reply_is_never_empty_and_from_pool(message):
    reply = FallbackGenerator().reply(message)
    assert reply
    assert reply in ALL_REPLIES
