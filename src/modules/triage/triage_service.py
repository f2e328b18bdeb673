# src/modules/triage/triage_service.py
"""
Keyword-based symptom triage.

Classifies a patient's message as a greeting, small talk or a medical
concern, picks the best matching specialization and derives a coarse
urgency level. Everything here is a pure function of the input text, the
rule tables and the randomness source used to vary canned replies.
"""

import random
from typing import List, Optional

from src.common.store.document_store import DocumentStore
from src.models.models import MessageKind, Urgency
from src.modules.doctors import doctors_service
from src.modules.doctors.schemas import DoctorSummary

from .rules import DEFAULT_RULES, TriageRules
from .schemas import Classification, TriageResponse


def _matches_any(patterns, text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


def best_category(text: str, rules: TriageRules = DEFAULT_RULES) -> Optional[str]:
    """
    Return the category with the most keyword hits in ``text``.

    A later category only replaces the current best on a strictly higher
    count, so ties resolve to table order. Returns None when nothing matches.
    """
    best, best_count = None, 0
    for category, keywords in rules.categories.items():
        count = sum(1 for keyword in keywords if keyword.lower() in text)
        if count > best_count:
            best, best_count = category, count
    return best


def assess_urgency(text: str, rules: TriageRules = DEFAULT_RULES) -> Urgency:
    if any(keyword in text for keyword in rules.high_urgency):
        return Urgency.HIGH
    if any(keyword in text for keyword in rules.low_urgency):
        return Urgency.LOW
    return Urgency.MEDIUM


def classify(
    text: str,
    rules: TriageRules = DEFAULT_RULES,
    rng: Optional[random.Random] = None
) -> Classification:
    """Classify a free-text message. Never raises on any string input."""
    rng = rng or random
    normalized = (text or "").strip().lower()

    if _matches_any(rules.greeting_patterns, normalized):
        return Classification(
            kind=MessageKind.GREETING,
            urgency=Urgency.LOW,
            response=rng.choice(rules.greetings),
        )

    if _matches_any(rules.casual_patterns, normalized):
        return Classification(
            kind=MessageKind.CASUAL,
            urgency=Urgency.LOW,
            response=rng.choice(rules.casual_replies),
        )

    category = best_category(normalized, rules)
    if category is None:
        return Classification(
            kind=MessageKind.MEDICAL,
            urgency=Urgency.LOW,
            response=rules.no_match_reply,
        )

    empathy = rules.empathy.get(category) or rules.empathy[rules.default_category]
    tips = rules.tips.get(category) or rules.tips[rules.default_category]

    return Classification(
        kind=MessageKind.MEDICAL,
        category=category,
        urgency=assess_urgency(normalized, rules),
        response=rng.choice(empathy),
        tips=list(tips),
    )


def follow_up_questions(category: str, rules: TriageRules = DEFAULT_RULES) -> List[str]:
    """Clarifying questions for a category, falling back to the default category."""
    questions = rules.follow_ups.get(category) or rules.follow_ups[rules.default_category]
    return list(questions)


async def analyze_symptoms(
    store: DocumentStore,
    text: str,
    rules: TriageRules = DEFAULT_RULES,
    rng: Optional[random.Random] = None
) -> TriageResponse:
    """Classify a message and attach follow-up questions and suggested doctors."""
    result = classify(text, rules, rng)

    questions: List[str] = []
    doctors: List[DoctorSummary] = []
    if result.category:
        questions = follow_up_questions(result.category, rules)
        ranked = await doctors_service.rank_by_specialization(store, [result.category])
        doctors = [doctors_service.to_summary(doctor) for doctor in ranked]

    return TriageResponse(
        **result.model_dump(),
        follow_up_questions=questions,
        suggested_doctors=doctors
    )
