"""Synthetic signout census for demos and tests. Never contains real patient data."""

from __future__ import annotations

import random

FIRST_NAMES = (
    "James", "Mary", "Kenneth", "Patricia", "Robert", "Jennifer", "Michael", "Linda",
    "William", "Elizabeth", "David", "Barbara", "Richard", "Susan", "Joseph", "Jessica",
)
LAST_NAMES = (
    "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez",
    "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
)
CHRONIC_PROBLEMS = (
    "HTN", "T2DM", "HLD", "COPD", "CHF", "AFib", "CKD", "Asthma", "GERD", "Obesity",
)
ADMISSION_REASONS = (
    "Chest Pain", "SOB", "Abdominal Pain", "AMS", "Syncope", "Fall", "Fever",
    "Sepsis", "Pneumonia", "UTI",
)
DISPOSITIONS = (
    "Home tomorrow", "SNF placement pending", "Rehab eval", "TBD", "Waiting on insurance auth",
)


def _patient_block(rng: random.Random, number: int) -> str:
    name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
    room = rng.randint(100, 599)
    age = rng.randint(20, 89)
    gender = rng.choice("MF")
    reason = rng.choice(ADMISSION_REASONS)

    problems = list(dict.fromkeys(rng.choice(CHRONIC_PROBLEMS) for _ in range(rng.randint(1, 4))))
    bp = f"{rng.randint(100, 139)}/{rng.randint(60, 79)}"
    temp = f"{rng.uniform(36.5, 38.0):.1f}"

    lines = [
        f"### {number}. {name} – {room}",
        f"**Age:** {age}{gender}",
        f"**Admitted for:** {reason}",
        f"VS: BP: {bp} HR: {rng.randint(60, 99)} RR: {rng.randint(12, 19)} "
        f"SpO2: {rng.randint(95, 99)}% T: {temp}",
        "",
        f"# {reason}",
        "- Monitor and treat",
    ]
    for problem in problems:
        lines.extend([f"# {problem}", "- Continue home regimen"])
    lines.extend(
        [
            "",
            f"**Dispo:** {rng.choice(DISPOSITIONS)}",
            "- [ ] Complete admission orders",
            "- [ ] Consult specialist if needed",
        ]
    )
    return "\n".join(lines)


def generate_sample_census(count: int = 10, seed: int | None = 0) -> str:
    """Return *count* numbered patient sections; the same seed gives the same text."""

    if count < 0:
        raise ValueError("count must be non-negative")
    rng = random.Random(seed)
    return "\n\n".join(_patient_block(rng, number) for number in range(1, count + 1))


__all__ = ["generate_sample_census"]
