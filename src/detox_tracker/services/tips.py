"""Static content: common symptoms, detox tips and resources."""

import random
from datetime import date
from typing import Optional

COMMON_SYMPTOMS = [
    "Irritability",
    "Anxiety",
    "Insomnia",
    "Loss of appetite",
    "Strange dreams",
    "Headache",
    "Sweating",
    "Craving",
    "Depression",
    "Restlessness",
    "Nausea",
    "Brain fog",
]

DETOX_TIPS = [
    "Stay hydrated",
    "Exercise regularly",
    "Get adequate sleep",
    "Eat fiber-rich foods",
    "Reduce stress",
    "Avoid alcohol",
    "Try sauna sessions",
]

RESOURCES = [
    {
        "title": "Navy Drug and Alcohol Prevention",
        "url": "https://www.mynavyhr.navy.mil/Support-Services/21st-Century-Sailor/Drug-Alcohol/",
    },
    {
        "title": "Navy Recruiting Command",
        "url": "https://www.cnrc.navy.mil/",
    },
]


def tip_of_the_day(day: Optional[date] = None) -> str:
    """Pick a tip that stays the same for a whole calendar day."""
    day = day or date.today()
    return random.Random(day.toordinal()).choice(DETOX_TIPS)


def simulate_test(probability: int, rng: Optional[random.Random] = None) -> bool:
    """Roll a simulated test; True means pass."""
    rng = rng or random.Random()
    return rng.random() * 100 <= probability
