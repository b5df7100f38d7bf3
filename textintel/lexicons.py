# textintel/lexicons.py
"""Fixed word tables used by the analysis stages.

Everything here is built once at import time and exposed read-only
(frozensets and mapping proxies), so it can be shared between worker
threads without locking.
"""
import re
from types import MappingProxyType

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from .schemas import Language

# --- Crime relatedness ---

CRIME_KEYWORDS = frozenset([
    "police", "crime", "theft", "robbery", "burglary", "assault", "murder",
    "kidnap", "fraud", "scam", "drug", "violence", "weapon", "gun", "knife",
    "arrest", "jail", "court", "law", "legal", "illegal", "criminal",
    "safety", "security", "danger", "threat", "emergency", "help",
    # Tamil
    "போலீஸ்", "குற்றம்", "திருட்டு", "கொள்ளை", "வன்முறை", "ஆபத்து", "பாதுகாப்பு",
    # Hindi
    "पुलिस", "अपराध", "चोरी", "लूट", "हिंसा", "खतरा", "सुरक्षा",
    # Telugu
    "పోలీస్", "నేరం", "దొంగతనం", "దోపిడీ", "హింస", "ప్రమాదం", "భద్రత",
])

# --- Hate speech ---

# keyword class -> (category tag, words). Untagged words still count as hits.
HATE_KEYWORD_CLASSES = MappingProxyType({
    "threat": ("threats", frozenset(["kill", "murder", "die", "bomb", "attack"])),
    "harassment": ("harassment", frozenset(["stupid", "idiot", "fool", "worthless"])),
    "hostility": ("hostility", frozenset(["hate", "enemy", "destroy"])),
    "abusive": (None, frozenset([
        "terrorist", "violence", "threat", "revenge", "war",
        "useless", "disgusting",
        "damn", "hell", "bloody", "bastard", "bitch",
    ])),
})

AGGRESSIVE_PATTERNS = (
    re.compile(r"kill\s+you", re.IGNORECASE),
    re.compile(r"i\s+hate", re.IGNORECASE),
    re.compile(r"go\s+die", re.IGNORECASE),
    re.compile(r"you\s+suck", re.IGNORECASE),
    re.compile(r"shut\s+up", re.IGNORECASE),
)

HATE_CATEGORIES = ("threats", "harassment", "hostility", "aggressive")

# --- Sentiment ---

# Civic-safety vocabulary the general English lexicon misjudges.
ENGLISH_DOMAIN_OVERRIDES = MappingProxyType({
    "police": 1.0,
    "officer": 1.0,
    "safety": 2.0,
    "security": 2.0,
    "protection": 2.0,
    "help": 2.0,
    "rescue": 3.0,
    "justice": 2.0,
    "crime": -2.0,
    "criminal": -2.0,
    "theft": -3.0,
    "robbery": -3.0,
    "murder": -4.0,
    "assault": -3.0,
    "violence": -3.0,
    "danger": -2.0,
    "threat": -3.0,
})

TAMIL_SENTIMENT_WORDS = MappingProxyType({
    "நல்ல": 2, "அருமை": 3, "சிறப்பு": 2, "மகிழ்ச்சி": 3,
    "நன்றி": 2, "வாழ்த்து": 2, "பாராட்டு": 2,
    "மோசம்": -2, "கெட்ட": -2, "பிரச்சனை": -1, "கோபம்": -2,
    "வருத்தம்": -1, "ஆபத்து": -3, "எரிச்சல்": -1,
})

HINDI_SENTIMENT_WORDS = MappingProxyType({
    "अच्छा": 2, "बेहतरीन": 3, "शानदार": 3, "खुशी": 3,
    "धन्यवाद": 2, "बधाई": 2, "तारीफ": 2,
    "बुरा": -2, "गलत": -2, "समस्या": -1, "गुस्सा": -2,
    "दुख": -1, "खतरा": -3, "परेशानी": -1,
})

TELUGU_SENTIMENT_WORDS = MappingProxyType({
    "మంచి": 2, "అద్భుతం": 3, "బాగుంది": 3, "సంతోషం": 3,
    "ధన్యవాదాలు": 2, "అభినందనలు": 2, "ప్రశంసలు": 2,
    "చెడ్డది": -2, "తప్పు": -2, "సమస్య": -1, "కోపం": -2,
    "బాధ": -1, "ప్రమాదం": -3, "ఇబ్బంది": -1,
})

# English is scored by VADER, not by a word table.
SENTIMENT_TABLES = MappingProxyType({
    Language.TAMIL: TAMIL_SENTIMENT_WORDS,
    Language.HINDI: HINDI_SENTIMENT_WORDS,
    Language.TELUGU: TELUGU_SENTIMENT_WORDS,
})

# --- Intent classifier training examples (label per sentence) ---

INTENT_EXAMPLES = MappingProxyType({
    Language.TAMIL: (
        ("போலீஸ் நல்லா வேலை செய்யுறாங்க", "positive"),
        ("பாதுகாப்பு மிக சிறப்பா இருக்கு", "positive"),
        ("அவசர காலத்துல உடனே வந்தாங்க", "positive"),
        ("திருட்டு நடந்திருக்கு பயமா இருக்கு", "negative"),
        ("ரொம்ப மோசமான சம்பவம்", "negative"),
        ("என்ன பண்ணுறாங்க தெரியலை", "neutral"),
    ),
    Language.HINDI: (
        ("पुलिस बहुत अच्छा काम कर रही है", "positive"),
        ("सुरक्षा बहुत बेहतरीन है", "positive"),
        ("चोरी हो गई बहुत डर लग रहा", "negative"),
        ("बुरी घटना हुई है", "negative"),
        ("क्या हो रहा है पता नहीं", "neutral"),
    ),
    Language.TELUGU: (
        ("పోలీసులు చాలా బాగా పని చేస్తున్నారు", "positive"),
        ("భద్రత చాలా మెరుగ్గా ఉంది", "positive"),
        ("దొంగతనం జరిగింది భయం వేస్తోంది", "negative"),
        ("చెడ్డ సంఘటన జరిగింది", "negative"),
        ("ఏమి జరుగుతుందో తెలియదు", "neutral"),
    ),
})

# --- Keyword extraction ---

STOPWORDS = frozenset(ENGLISH_STOP_WORDS)

# Latin word characters plus the Devanagari, Tamil and Telugu blocks
# (their vowel signs are combining marks, which \w does not match).
WORD_RE = re.compile(r"[\w\u0900-\u0963\u0966-\u097F\u0B80-\u0BFF\u0C00-\u0C7F]+")
