"""
Tests for the keyword symptom classifier and the triage endpoint logic.
"""
import dataclasses
from types import MappingProxyType

import pytest

from conftest import make_doctor, save_user
from src.models.models import MessageKind, Urgency
from src.modules.triage import triage_service
from src.modules.triage.rules import DEFAULT_RULES


# ============================================================================
# Classification
# ============================================================================

class TestClassify:

    @pytest.mark.parametrize("text", ["Hello", "  HEY  ", "good morning", "how are you?"])
    def test_greeting_gets_low_urgency_canned_reply(self, text, rng):
        result = triage_service.classify(text, rng=rng)

        assert result.kind == MessageKind.GREETING
        assert result.urgency == Urgency.LOW
        assert result.category is None
        assert result.response in DEFAULT_RULES.greetings

    @pytest.mark.parametrize("text", ["thank you", "I'm fine thanks", "not much"])
    def test_small_talk(self, text, rng):
        result = triage_service.classify(text, rng=rng)

        assert result.kind == MessageKind.CASUAL
        assert result.urgency == Urgency.LOW
        assert result.response in DEFAULT_RULES.casual_replies

    def test_skin_complaint_routes_to_dermatology(self, rng):
        result = triage_service.classify("I have an itchy rash on my skin", rng=rng)

        assert result.kind == MessageKind.MEDICAL
        assert result.category == "Dermatology"
        assert result.urgency == Urgency.MEDIUM
        assert result.response in DEFAULT_RULES.empathy["Dermatology"]
        assert result.tips == list(DEFAULT_RULES.tips["Dermatology"])

    def test_high_urgency_keywords_win_over_low(self, rng):
        result = triage_service.classify("mild but severe chest pain", rng=rng)

        assert result.category == "Cardiology"
        assert result.urgency == Urgency.HIGH

    def test_low_urgency(self, rng):
        result = triage_service.classify("slight fever", rng=rng)

        assert result.category == "General Medicine"
        assert result.urgency == Urgency.LOW

    def test_category_without_own_texts_uses_general_medicine_texts(self, rng):
        result = triage_service.classify("my knee has a fracture", rng=rng)

        assert result.category == "Orthopedics"
        assert result.response in DEFAULT_RULES.empathy["General Medicine"]
        assert result.tips == list(DEFAULT_RULES.tips["General Medicine"])

    def test_no_keyword_match(self, rng):
        result = triage_service.classify("zzz qqq", rng=rng)

        assert result.kind == MessageKind.MEDICAL
        assert result.category is None
        assert result.urgency == Urgency.LOW
        assert result.response == DEFAULT_RULES.no_match_reply
        assert result.tips == []

    @pytest.mark.parametrize("text", ["", "   ", None, "!!!???", "éèê"])
    def test_never_raises(self, text):
        assert triage_service.classify(text).kind in set(MessageKind)


class TestBestCategory:

    def test_tie_goes_to_first_category_in_table_order(self):
        rules = dataclasses.replace(
            DEFAULT_RULES,
            categories=MappingProxyType({"First": ("alpha",), "Second": ("beta",)})
        )

        assert triage_service.best_category("alpha beta", rules) == "First"
        assert triage_service.best_category("beta alpha", rules) == "First"

    def test_strictly_higher_count_wins(self):
        rules = dataclasses.replace(
            DEFAULT_RULES,
            categories=MappingProxyType({"First": ("alpha",), "Second": ("beta", "gamma")})
        )

        assert triage_service.best_category("alpha beta gamma", rules) == "Second"

    def test_matching_is_substring_based(self):
        assert triage_service.best_category("bad stomach cramps", DEFAULT_RULES) == "Gastroenterology"


class TestFollowUps:

    def test_known_category(self):
        questions = triage_service.follow_up_questions("Cardiology")

        assert questions == list(DEFAULT_RULES.follow_ups["Cardiology"])

    def test_unknown_category_falls_back(self):
        questions = triage_service.follow_up_questions("Orthopedics")

        assert questions == list(DEFAULT_RULES.follow_ups["General Medicine"])


# ============================================================================
# analyze_symptoms
# ============================================================================

class TestAnalyzeSymptoms:

    async def test_attaches_followups_and_ranked_doctors(self, store, rng):
        await save_user(store, make_doctor("d1", specialization="Cardiology", experience=3))
        await save_user(store, make_doctor("d2", specialization="Cardiology", experience=15))
        await save_user(store, make_doctor("d3", specialization="Dermatology", experience=30))

        result = await triage_service.analyze_symptoms(store, "heart palpitations", rng=rng)

        assert result.category == "Cardiology"
        assert result.follow_up_questions == list(DEFAULT_RULES.follow_ups["Cardiology"])
        assert [d.id for d in result.suggested_doctors] == ["d2", "d1"]

    async def test_greeting_skips_doctor_lookup(self, store, rng):
        result = await triage_service.analyze_symptoms(store, "hi", rng=rng)

        assert result.suggested_doctors == []
        assert result.follow_up_questions == []
        assert store.calls == []
