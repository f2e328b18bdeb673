# src/modules/triage/rules.py
"""Static keyword tables used by the symptom classifier.

The tables are built once at import time and exposed read-only through
``DEFAULT_RULES``. Category order matters: when two categories match the same
number of keywords, the one listed first wins.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple


DEFAULT_CATEGORY = "General Medicine"


@dataclass(frozen=True)
class TriageRules:
    greeting_patterns: Tuple[Pattern, ...]
    casual_patterns: Tuple[Pattern, ...]
    greetings: Tuple[str, ...]
    casual_replies: Tuple[str, ...]
    categories: Mapping[str, Tuple[str, ...]]
    empathy: Mapping[str, Tuple[str, ...]]
    tips: Mapping[str, Tuple[str, ...]]
    follow_ups: Mapping[str, Tuple[str, ...]]
    high_urgency: Tuple[str, ...]
    low_urgency: Tuple[str, ...]
    no_match_reply: str
    default_category: str = DEFAULT_CATEGORY


def _freeze(table: dict) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


GREETING_PATTERNS = (
    re.compile(r"^(hi|hello|hey|hiya|howdy)$", re.IGNORECASE),
    re.compile(r"^(hi|hello|hey)\s+(there|friend|buddy)?$", re.IGNORECASE),
    re.compile(r"^good\s+(morning|afternoon|evening)$", re.IGNORECASE),
    re.compile(r"^how\s+are\s+you(\s+doing)?(\?)?$", re.IGNORECASE),
    re.compile(r"^what'?s\s+up(\?)?$", re.IGNORECASE),
    re.compile(r"^(nice\s+to\s+meet\s+you|pleasure\s+to\s+meet\s+you)$", re.IGNORECASE),
)

CASUAL_PATTERNS = (
    re.compile(
        r"^(i'?m\s+)?(good|fine|okay|ok|great|awesome|fantastic|wonderful)(\s+thanks?)?(\s+and\s+you)?(\?)?$",
        re.IGNORECASE,
    ),
    re.compile(r"^(not\s+much|nothing\s+much|just\s+saying\s+hi)$", re.IGNORECASE),
    re.compile(r"^(thanks?|thank\s+you)(\s+so\s+much)?$", re.IGNORECASE),
)

GREETINGS = (
    "Hey there! How's your day going? I'm here if you want to chat about anything health-related!",
    "Hi! Nice to see you! I'm your friendly health buddy. What's on your mind today?",
    "Hello! Hope you're having a good day! I'm here to chat about any health stuff you might be wondering about.",
    "Hey! Great to meet you! Think of me as a knowledgeable friend who knows a lot about health. What can I help you with?",
    "Hi there! I'm so glad you stopped by! What would you like to talk about?",
    "Hello! How are you feeling today? I'm here to chat about anything health-related that might be on your mind!",
    "Hey! Welcome! I love helping people feel better and connecting them with great doctors when needed!",
)

CASUAL_REPLIES = (
    "That's awesome! I'm doing great too, thanks for asking! Is there anything health-related you'd like to talk about today?",
    "I'm doing wonderful, thank you! I really enjoy helping people with their health questions. Anything on your mind health-wise?",
    "I'm fantastic! I love helping people understand their health better. What about you, how are you feeling?",
    "I'm great! Thanks for asking! I'm always happy to help with health questions. Anything you'd like to know?",
    "I'm doing really well! Is there anything you'd like to discuss about your health today?",
)

MEDICAL_CATEGORIES = {
    "Dermatology": [
        "skin", "rash", "itchy", "acne", "pimples", "spots", "dry skin", "eczema",
        "psoriasis", "moles", "wrinkles", "scars", "allergic reaction", "hives",
        "red spots", "skin problem", "skin issue", "breakout", "blemish", "irritation",
        "burning skin", "peeling", "flaky", "bumps", "skin redness", "skin condition",
        "dermatitis", "rosacea", "blackheads", "whiteheads", "skin allergy",
    ],
    "Cardiology": [
        "chest pain", "heart", "palpitations", "shortness of breath", "cardiac",
        "heart racing", "chest tightness", "heart attack", "chest pressure",
        "irregular heartbeat", "heart flutter", "chest discomfort",
    ],
    "Gastroenterology": [
        "stomach", "abdomen", "nausea", "vomiting", "digestive", "acid reflux",
        "stomach pain", "belly ache", "indigestion", "heartburn", "bloating",
        "constipation", "diarrhea", "stomach cramps", "gas", "upset stomach",
    ],
    "Pulmonology": [
        "lungs", "cough", "breathing", "asthma", "respiratory",
        "breathing problems", "wheezing", "chest congestion", "shortness of breath",
        "difficulty breathing", "bronchitis", "pneumonia",
    ],
    "Psychiatry": [
        "anxiety", "depression", "mental health", "stress", "panic", "mood",
        "feeling sad", "worried", "anxious", "depressed", "overwhelmed",
        "panic attack", "mental", "emotional", "psychological",
    ],
    "Neurology": [
        "headache", "migraine", "dizzy", "seizure", "neurological",
        "head pain", "dizziness", "vertigo", "memory problems", "confusion",
        "numbness", "tingling", "weakness",
    ],
    "Orthopedics": [
        "bone", "joint", "back pain", "knee", "shoulder", "fracture", "arthritis",
        "joint pain", "muscle pain", "sprain", "strain", "injury", "broken",
        "hip pain", "ankle pain", "wrist pain", "neck pain",
    ],
    "Ophthalmology": [
        "eye", "vision", "blurry", "sight", "eye pain", "eyes",
        "eye problems", "can't see", "vision problems", "double vision",
        "eye infection", "red eyes", "dry eyes",
    ],
    "ENT": [
        "ear", "throat", "nose", "sinus", "hearing", "ears",
        "ear pain", "sore throat", "stuffy nose", "runny nose",
        "hearing loss", "tinnitus", "earache", "congestion",
    ],
    "General Medicine": [
        "fever", "cold", "flu", "fatigue", "weakness", "tired",
        "feeling sick", "not feeling well", "pain", "hurt", "ache",
        "temperature", "chills", "body aches", "malaise",
    ],
}

EMPATHY = {
    "Dermatology": [
        "Oh no, skin issues can be so frustrating! Let's figure out who can help you best.",
        "Skin problems are the worst, aren't they? A dermatologist can really make a difference here.",
        "I'm sorry you're dealing with skin troubles! You don't have to just put up with it.",
        "Skin issues can be such a pain! The good news is most of them are very treatable.",
    ],
    "Cardiology": [
        "Heart symptoms can be really scary! Let's get you connected with a heart specialist.",
        "Heart issues are so worrying, aren't they? It's good that you're paying attention to this.",
        "I hear you about the heart concerns, that has to be really stressful. Let's get you some help.",
    ],
    "Psychiatry": [
        "I'm really glad you're reaching out about this! Your mental health matters just as much as your physical health.",
        "Thank you for sharing that with me. I know it's not always easy to talk about mental health.",
        "I really appreciate you opening up about this! Talking to a professional can help a lot.",
    ],
    "General Medicine": [
        "Aw, I'm sorry you're not feeling well! Let's see who can help you feel better.",
        "Feeling under the weather is never fun! A doctor can help you get back on your feet.",
        "I'm sorry you're dealing with this! Let's find you the right care.",
    ],
}

HEALTH_TIPS = {
    "Dermatology": [
        "Try to be gentle with your skin and avoid harsh scrubbing",
        "Keep your skin moisturized with a fragrance-free cream",
        "Don't forget sunscreen, even on cloudy days",
        "Identify triggers like new soaps or foods",
        "Stay hydrated",
    ],
    "Cardiology": [
        "Avoid strenuous activities until you've been checked",
        "Call emergency services right away if symptoms become severe",
        "Try slow, deep breathing when you feel palpitations",
        "Keep a symptom journal to share with your doctor",
    ],
    "Psychiatry": [
        "Be gentle with yourself",
        "Maintain a regular daily routine",
        "Reach out to friends or family you trust",
        "Try journaling or a short walk outside",
    ],
    "General Medicine": [
        "Rest is your best friend",
        "Stay hydrated",
        "Eat light, easy-to-digest foods",
        "Listen to your body and don't push through it",
    ],
}

FOLLOW_UP_QUESTIONS = {
    "Dermatology": [
        "How long have you been dealing with this skin issue?",
        "Does it itch or cause any discomfort?",
        "Have you noticed any triggers that make it worse?",
        "Have you tried any treatments or products for it?",
    ],
    "Cardiology": [
        "When did you first notice these heart symptoms?",
        "Do they happen during physical activity or at rest?",
        "Any family history of heart problems?",
        "Are you currently taking any medications?",
    ],
    "Psychiatry": [
        "How long have you been feeling this way?",
        "Have you noticed any specific triggers?",
        "Are you getting enough sleep lately?",
        "Do you have support from family or friends?",
    ],
    "General Medicine": [
        "How long have you been feeling unwell?",
        "Any other symptoms you've noticed?",
        "Have you taken your temperature?",
        "Are you taking any medications currently?",
    ],
}

HIGH_URGENCY_KEYWORDS = (
    "severe", "intense", "unbearable", "emergency", "can't breathe", "chest pain", "heart attack",
    "suicide", "kill myself", "bleeding heavily", "unconscious", "seizure", "stroke",
)

LOW_URGENCY_KEYWORDS = (
    "mild", "slight", "minor", "small", "little bit", "sometimes",
    "occasionally", "not too bad", "manageable",
)

NO_MATCH_REPLY = "I'd love to help with any health concerns. Could you describe your symptoms a bit more?"


DEFAULT_RULES = TriageRules(
    greeting_patterns=GREETING_PATTERNS,
    casual_patterns=CASUAL_PATTERNS,
    greetings=GREETINGS,
    casual_replies=CASUAL_REPLIES,
    categories=_freeze(MEDICAL_CATEGORIES),
    empathy=_freeze(EMPATHY),
    tips=_freeze(HEALTH_TIPS),
    follow_ups=_freeze(FOLLOW_UP_QUESTIONS),
    high_urgency=HIGH_URGENCY_KEYWORDS,
    low_urgency=LOW_URGENCY_KEYWORDS,
    no_match_reply=NO_MATCH_REPLY,
)
