from __future__ import annotations

import logging
import math
import random
from typing import Callable, Dict, Optional, Tuple

from pydantic import BaseModel
from sympy import Rational

from settings import MAX_REGENERATE_ATTEMPTS

logger = logging.getLogger("helix.generator")


class Question(BaseModel):
    id: int
    text: str
    answer: str
    steps: str


# (text, answer, steps)
Built = Tuple[str, str, str]

PLACEHOLDER: Built = ("Topic logic generated.", "0", "N/A")

# Decimal places tried before giving up on an exact decimal rendering
_MAX_DECIMALS = 12


# --- Formatting helpers ------------------------------------------------------------


def _one_dp(value: float) -> str:
    """Round to 1 d.p., dropping a trailing '.0' (13.0 -> '13')."""
    s = f"{value:.1f}"
    if s.endswith(".0"):
        s = s[:-2]
    return "0" if s == "-0" else s


def _exact_decimal(value: Rational) -> str:
    """
    Render an exact rational as an integer or terminating decimal: 39/2 -> '19.5'.
    Non-terminating values fall back to a rounded float.
    """
    if value.q == 1:
        return str(value.p)
    for places in range(1, _MAX_DECIMALS + 1):
        scaled = value * 10**places
        if scaled.q == 1:
            digits = str(abs(scaled.p)).rjust(places + 1, "0")
            sign = "-" if scaled.p < 0 else ""
            return f"{sign}{digits[:-places]}.{digits[-places:]}"
    return f"{float(value):.{_MAX_DECIMALS}g}"


def _signed(coef: int, suffix: str = "") -> str:
    """' + 3x' / ' - 3x' for a term after the first; empty when the term is zero."""
    if coef == 0:
        return ""
    op = "+" if coef > 0 else "-"
    return f" {op} {abs(coef)}{suffix}"


def _bracket(root_shift: int) -> str:
    if root_shift == 0:
        return "x"
    return f"(x{_signed(root_shift)})"


def _coef_x(k: int) -> str:
    return "x" if k == 1 else f"{k}x"


# --- Algebra -----------------------------------------------------------------------


def _expand_brackets(rng) -> Built:
    a = rng.randint(2, 9)
    b = rng.randint(1, 12)
    op = "+" if rng.random() > 0.5 else "-"
    text = f"Expand: {a}(x {op} {b})"
    answer = f"{a}x{op}{a * b}"
    steps = f"Multiply {a} by x, then {a} by {op}{b}."
    return text, answer, steps


def _factorise_linear(rng) -> Built:
    hcf = rng.randint(2, 12)
    k = rng.randint(1, 5)
    n = rng.randint(1, 9)
    # keep the bracket fully factorised so the stated HCF really is the highest
    while math.gcd(k, n) != 1:
        n = rng.randint(1, 9)
    text = f"Factorise: {hcf * k}x + {hcf * n}"
    answer = f"{hcf}({_coef_x(k)}+{n})"
    steps = f"Highest Common Factor is {hcf}."
    return text, answer, steps


def _solve_quadratics(rng) -> Built:
    # Pick the roots first so the quadratic always factorises over the integers
    m = rng.randint(-9, 9) or 1
    n = rng.randint(-9, 9)
    total = m + n
    product = m * n
    text = (
        f"Solve: x²{_signed(total, 'x')}{_signed(product)} = 0 "
        "(separate with comma, smallest first)"
    )
    lo, hi = sorted((-m, -n))
    answer = f"{lo},{hi}"
    steps = f"Factorise to {_bracket(m)}{_bracket(n)}. Flip signs."
    return text, answer, steps


def _completing_square(rng) -> Built:
    a = rng.randint(1, 10)
    b = rng.randint(1, 50)
    coef = 2 * a
    remainder = b - a * a
    text = f"Write x² + {coef}x + {b} in the form (x+a)² + b"
    answer = f"(x+{a})^2{_signed(remainder).replace(' ', '')}"
    steps = f"Halve {coef} to get {a}. Square it ({a * a}). Subtract that from {b}."
    return text, answer, steps


def _equating_coefficients(rng) -> Built:
    big_a = rng.randint(2, 5)
    big_b = rng.randint(1, 10)
    text = f"If {big_a}(x + p) ≡ {big_a}x + {big_a * big_b}, find the value of p."
    answer = str(big_b)
    steps = (
        f"Expand the left side: {big_a}x + {big_a}p. Therefore {big_a}p = {big_a * big_b}."
    )
    return text, answer, steps


# --- Geometry ----------------------------------------------------------------------


def _pythagoras(rng) -> Built:
    a = rng.randint(3, 12)
    b = rng.randint(4, 15)
    text = f"Right-angled triangle legs are {a} and {b}. Find Hypotenuse (round to 1 d.p.)"
    answer = _one_dp(math.hypot(a, b))
    steps = f"sqrt({a}² + {b}²)"
    return text, answer, steps


def _trigonometry(rng) -> Built:
    hyp = rng.randint(10, 20)
    angle = rng.randint(20, 60)
    text = f"Right triangle: Hypotenuse = {hyp}, Angle = {angle}°. Find Opposite side (1 d.p.)"
    answer = _one_dp(hyp * math.sin(math.radians(angle)))
    steps = "SOH: Opp = Hyp × sin(angle)"
    return text, answer, steps


EXACT_TRIG = [
    ("sin(30)", "0.5"),
    ("cos(60)", "0.5"),
    ("tan(45)", "1"),
    ("sin(90)", "1"),
    ("cos(0)", "1"),
    ("sin(0)", "0"),
]


def _exact_trig(rng) -> Built:
    expr, value = rng.choice(EXACT_TRIG)
    text = f"What is the exact value of {expr}?"
    return text, value, "Memorise the exact trig table or use triangles."


def _pythagoras_3d(rng) -> Built:
    length = rng.randint(2, 6)
    width = rng.randint(2, 6)
    height = rng.randint(2, 6)
    text = (
        f"Cuboid dimensions: {length}x{width}x{height}. "
        "Find length of internal diagonal (1 d.p.)"
    )
    answer = _one_dp(math.sqrt(length**2 + width**2 + height**2))
    return text, answer, "sqrt(l² + w² + h²)"


def _perp_gradients(rng) -> Built:
    m = rng.randint(2, 5)
    sign = 1 if rng.random() > 0.5 else -1
    gradient = m * sign
    text = (
        f"Line A has gradient {gradient}. "
        "What is the gradient of a line perpendicular to A? (fraction like -1/2)"
    )
    answer = str(Rational(-1, gradient))
    return text, answer, "Negative reciprocal. Flip fraction and change sign."


# --- Number / proportion -----------------------------------------------------------


PERCENT_CHOICES = [5, 10, 15, 20, 25, 50, 75]


def _percentages(rng) -> Built:
    amount = rng.randint(2, 50) * 10
    pct = rng.choice(PERCENT_CHOICES)
    text = f"Find {pct}% of {amount}"
    answer = _exact_decimal(Rational(pct * amount, 100))
    steps = f"Convert {pct}% to decimal ({_exact_decimal(Rational(pct, 100))}) and multiply."
    return text, answer, steps


def _negative_indices(rng) -> Built:
    base = rng.randint(2, 5)
    power = rng.randint(1, 3)
    text = f"Evaluate {base} to the power of -{power} (write as fraction a/b)"
    answer = str(Rational(1, base**power))
    steps = f"Negative power means reciprocal. 1 over {base}^{power}."
    return text, answer, steps


def _profit(rng) -> Built:
    cost = rng.randint(5, 20) * 10
    # 10-50% profit; cost is a multiple of 10 so the selling price stays whole
    sell = cost * rng.randint(11, 15) // 10
    text = f"Bought for £{cost}, Sold for £{sell}. What is the % profit?"
    answer = _exact_decimal(Rational((sell - cost) * 100, cost))
    return text, answer, "(Difference / Original) × 100"


def _speed_dist_time(rng) -> Built:
    speed = rng.randint(30, 70)
    hours = rng.randint(2, 5)
    text = f"Car travels at {speed} mph for {hours} hours. Calculate distance."
    return text, str(speed * hours), "Distance = Speed × Time"


def _averages_mean(rng) -> Built:
    values = [rng.randint(2, 9) for _ in range(4)]
    total = sum(values)
    text = f"Find mean of: {', '.join(str(v) for v in values)}"
    answer = _exact_decimal(Rational(total, len(values)))
    steps = f"Add all numbers ({total}) divide by count ({len(values)})."
    return text, answer, steps


_BUILDERS: Dict[str, Callable[..., Built]] = {
    "expand_brackets": _expand_brackets,
    "factorise_linear": _factorise_linear,
    "solve_quadratics": _solve_quadratics,
    "completing_square": _completing_square,
    "equating_coefficients": _equating_coefficients,
    "pythagoras": _pythagoras,
    "trigonometry": _trigonometry,
    "exact_trig": _exact_trig,
    "3d_pythagoras": _pythagoras_3d,
    "perp_gradients": _perp_gradients,
    "percentages": _percentages,
    "negative_indices": _negative_indices,
    "profit": _profit,
    "speed_dist_time": _speed_dist_time,
    "averages_mean": _averages_mean,
}


# --- Public API --------------------------------------------------------------------


def supported_topics() -> list[str]:
    return list(_BUILDERS)


def generate_question(topic_id: str, count: int, rng: Optional[random.Random] = None) -> Question:
    """
    Build question number `count` for a topic. Never raises: unknown topics get a
    placeholder question.
    """
    rng = rng or random
    builder = _BUILDERS.get(topic_id)
    if builder is None:
        logger.warning("no generator for topic %r, using placeholder", topic_id)
        text, answer, steps = PLACEHOLDER
    else:
        text, answer, steps = builder(rng)
    return Question(id=count, text=text, answer=answer, steps=steps)


def next_question(
    topic_id: str,
    count: int,
    previous: Optional[Question] = None,
    rng: Optional[random.Random] = None,
) -> Question:
    # Anti-dupe: avoid repeating the immediately preceding answer
    q = generate_question(topic_id, count, rng)
    attempts = 0
    while attempts < MAX_REGENERATE_ATTEMPTS and previous and q.answer == previous.answer:
        q = generate_question(topic_id, count, rng)
        attempts += 1
    return q
