# Topic catalogue, in unlock order.
# Position 0 is always open; each completed round opens the next one.

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel


class Topic(BaseModel):
    id: str
    title: str
    category: str
    position: int


class Explainer(BaseModel):
    title: str
    content: str


_RAW_TOPICS = [
    # Algebra
    ("expand_brackets", "Expanding Brackets", "Algebra"),
    ("factorise_linear", "Factorise Linear", "Algebra"),
    ("solve_quadratics", "Solve Quadratics", "Algebra"),
    ("completing_square", "Completing Square", "Algebra"),
    ("equating_coefficients", "Equating Coeffs", "Algebra"),
    # Geometry
    ("pythagoras", "Pythagoras' Theorem", "Geometry"),
    ("trigonometry", "Basic Trigonometry", "Geometry"),
    ("exact_trig", "Exact Trig Values", "Geometry"),
    ("3d_pythagoras", "3D Pythagoras", "Geometry"),
    ("perp_gradients", "Perpendicular Grads", "Geometry"),
    # Number
    ("percentages", "Percentages", "Number"),
    ("negative_indices", "Negative Indices", "Number"),
    ("profit", "Profit Calculations", "Number"),
    ("speed_dist_time", "Speed Dist Time", "Number"),
    ("averages_mean", "Mean Average", "Number"),
]

TOPICS: List[Topic] = [
    Topic(id=tid, title=title, category=cat, position=i)
    for i, (tid, title, cat) in enumerate(_RAW_TOPICS)
]
_BY_ID: Dict[str, Topic] = {t.id: t for t in TOPICS}

DEFAULT_EXPLAINER = Explainer(title="Instructions", content="Solve the questions given.\nBe precise.")

EXPLAINERS: Dict[str, Explainer] = {
    "expand_brackets": Explainer(
        title="The Claw",
        content="Multiply the outside term by EVERYTHING inside.\n2(x+3) -> 2x + 6",
    ),
    "factorise_linear": Explainer(
        title="Reverse Expand",
        content="Find the biggest number that divides both terms.\n"
        "Divide terms by it, put it outside.",
    ),
    "solve_quadratics": Explainer(
        title="Find the Roots",
        content="Make it equal zero.\nFactorise into (brackets).\nOne bracket must be zero.",
    ),
    "completing_square": Explainer(
        title="Halve and Square",
        content="Halve the x coefficient: that goes in the bracket.\n"
        "Square it and take it away from the constant.",
    ),
    "equating_coefficients": Explainer(
        title="Match the Terms",
        content="Expand the left side.\nThe numbers in front of matching terms must be equal.",
    ),
    "pythagoras": Explainer(
        title="a² + b² = c²",
        content="Square the two short sides and add.\nSquare root for the hypotenuse.",
    ),
    "trigonometry": Explainer(
        title="SOH CAH TOA",
        content="Label sides: Hypotenuse, Adjacent, Opposite.\nPick the right formula.",
    ),
    "exact_trig": Explainer(
        title="The Exact Table",
        content="sin 30 = cos 60 = 0.5\ntan 45 = sin 90 = cos 0 = 1\nsin 0 = 0",
    ),
    "3d_pythagoras": Explainer(
        title="Corner to Corner",
        content="Diagonal² = length² + width² + height²\nSquare root at the end.",
    ),
    "perp_gradients": Explainer(
        title="Flip and Negate",
        content="Perpendicular gradients multiply to -1.\n"
        "Turn the gradient upside down and change its sign.",
    ),
    "percentages": Explainer(
        title="Out of 100",
        content="Divide the percentage by 100.\nMultiply by the amount.",
    ),
    "negative_indices": Explainer(
        title="Flip It",
        content="A negative power means reciprocal.\n2^-3 = 1/2^3 = 1/8",
    ),
    "profit": Explainer(
        title="Difference over Original",
        content="Profit = sell - cost.\n% profit = profit / cost × 100",
    ),
    "speed_dist_time": Explainer(
        title="The DST Triangle",
        content="Distance = Speed × Time\nSpeed = Distance / Time\nTime = Distance / Speed",
    ),
    "averages_mean": Explainer(
        title="Share It Out",
        content="Add all the values.\nDivide by how many there are.",
    ),
}


def all_topics() -> List[Topic]:
    return list(TOPICS)


def get_topic(topic_id: str) -> Optional[Topic]:
    return _BY_ID.get(topic_id)


def topic_index(topic_id: Optional[str]) -> int:
    """Unlock position of a topic, or -1 when the id is unknown."""
    t = _BY_ID.get(topic_id or "")
    return t.position if t else -1


def get_explainer(topic_id: Optional[str]) -> Explainer:
    return EXPLAINERS.get(topic_id or "", DEFAULT_EXPLAINER)
