"""
Rule-based short-circuit answers, checked before any call to the LLM provider.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from loguru import logger

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class Rule:
    """A named regex and the reply it produces. ``strip`` matches against the
    trimmed original message instead of the lower-cased one."""

    name: str
    pattern: re.Pattern
    reply: Callable[[re.Match, datetime], str]
    strip: bool = False

    def search(self, message: str) -> Optional[re.Match]:
        text = message.strip() if self.strip else message.lower()
        return self.pattern.search(text)

    def apply(self, message: str, now: datetime) -> Optional[str]:
        m = self.search(message)
        if m is None:
            return None
        return self.reply(m, now)


# ─────────────────────────────────────────────────────────
#  ARITHMETIC
# ─────────────────────────────────────────────────────────

def format_number(value) -> str:
    """Render a result the way a JS number prints: ``4`` not ``4.0``."""
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # Past the interpreter's int-to-str digit limit
            return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def divide(a: int, b: int) -> float:
    # Division by zero reports IEEE results instead of raising
    if b == 0:
        return math.nan if a == 0 else math.inf
    try:
        return a / b
    except OverflowError:
        return math.inf if (a < 0) == (b < 0) else -math.inf


def _magnitude(digits: str):
    digits = digits.lstrip("0")
    return len(digits), digits


def _arithmetic(symbol: str, op: Callable[[int, int], float]):
    def reply(m: re.Match, now: datetime) -> str:
        a, b = m.group(1), m.group(2)
        try:
            result = format_number(op(int(a), int(b)))
        except ValueError:
            # Operands too long to parse as int
            result = "-Infinity" if symbol == "-" and _magnitude(b) > _magnitude(a) else "Infinity"
        return f"{a} {symbol} {b} = {result}"
    return reply


# ─────────────────────────────────────────────────────────
#  FIXED REPLIES
# ─────────────────────────────────────────────────────────

IDENTITY_REPLY = "🤖 I'm Yako, an AI assistant designed to help answer your questions and have conversations."
HOW_IT_WORKS_REPLY = (
    "💡 I work by using advanced natural language processing to understand your questions "
    "and provide helpful responses."
)
THANKS_REPLY = "😊 You're welcome! I'm happy to help."
SUHAIRA_REPLY = (
    "❤️💖💙💚💛💜🧡 OMG! We have the most gorgeous lady in the world talking to us today! "
    "💖❤️💙💚💛💜🧡 How are you doing Cutie Pie? 🧸🎀 You are Yako's Favorite User "
    "💖❤️💙💚💛💜🧡 Talha Sent Flowers For You 🪷🌷🌼🦋✨🌸🌺🦩"
)


def _fixed(text: str):
    return lambda m, now: text


RULES: Sequence[Rule] = (
    Rule("two_plus_two", re.compile(r"^(what\s+is\s+)?2\s*\+\s*2(\s*=\s*)?$"), _fixed("2 + 2 = 4")),
    Rule("time", re.compile(r"what.*time|current time"),
         lambda m, now: f"The current time is {now.strftime('%X')}."),
    Rule("date", re.compile(r"what.*date|today.*date|current date"),
         lambda m, now: f"Today's date is {now.strftime('%x')}."),
    Rule("addition", re.compile(r"(\d+)\s*\+\s*(\d+)"), _arithmetic("+", lambda a, b: a + b)),
    Rule("subtraction", re.compile(r"(\d+)\s*-\s*(\d+)"), _arithmetic("-", lambda a, b: a - b)),
    Rule("multiplication", re.compile(r"(\d+)\s*\*\s*(\d+)"), _arithmetic("×", lambda a, b: a * b)),
    Rule("division", re.compile(r"(\d+)\s*/\s*(\d+)"), _arithmetic("÷", divide)),
    Rule("identity", re.compile(r"who.*are.*you"), _fixed(IDENTITY_REPLY)),
    Rule("how_it_works", re.compile(r"how.*work"), _fixed(HOW_IT_WORKS_REPLY)),
    Rule("thanks", re.compile(r"thank|thanks"), _fixed(THANKS_REPLY)),
    Rule("suhaira", re.compile(r"^i\s*am\s*suhaira$", re.IGNORECASE), _fixed(SUHAIRA_REPLY), strip=True),
)


class RuleEngine:
    def __init__(self, rules: Sequence[Rule] = RULES, clock: Clock = datetime.now):
        self.rules = tuple(rules)
        self.clock = clock

    def try_rules(self, message: str) -> Optional[str]:
        """Reply of the first matching rule, or None when nothing matches."""
        now = self.clock()
        for rule in self.rules:
            reply = rule.apply(message, now)
            if reply is not None:
                logger.debug(f"Rule '{rule.name}' matched '{message[:40]}'")
                return reply
        return None
