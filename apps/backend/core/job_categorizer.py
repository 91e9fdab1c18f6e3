"""
Keyword classification of notice titles.

Two independent signals are derived from a title:
- the notice type (is this a recruitment advert, a result, an admit card...)
- the engineering branches the notice is relevant to, if any
"""
import logging
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class NoticeType(str, Enum):
    """Notice types, in classification priority order"""
    RESULT = "RESULT"
    EXAM_ADMIT_CARD = "EXAM_ADMIT_CARD"
    CALENDAR = "CALENDAR"
    APPRENTICESHIP = "APPRENTICESHIP"
    RECRUITMENT = "RECRUITMENT"
    GENERAL_INFO = "GENERAL_INFO"


# Tested top to bottom; the first type with a matching keyword wins, so a
# "Result of Recruitment Exam" is a RESULT.
NOTICE_TYPE_KEYWORDS: List[Tuple[NoticeType, List[str]]] = [
    (NoticeType.RESULT, [
        'result', 'merit list', 'selection list', 'marks', 'cut off', 'score',
    ]),
    (NoticeType.EXAM_ADMIT_CARD, [
        'admit card', 'hall ticket', 'exam date', 'interview schedule', 'call letter',
    ]),
    (NoticeType.CALENDAR, [
        'calendar', 'planner', 'schedule',
    ]),
    (NoticeType.APPRENTICESHIP, [
        'apprentice', 'nats', 'trade apprentice', 'act apprentice', 'apprenticeship',
    ]),
    (NoticeType.RECRUITMENT, [
        'recruit', 'vacancy', 'notification', 'advt', 'apply', 'post', 'officer', 'clerk',
    ]),
]

# Branch codes in output order. Keywords with surrounding spaces are whole
# words ("it" must not match "exhibit").
BRANCH_KEYWORDS: List[Tuple[str, List[str]]] = [
    ('CIVIL', ['civil', 'structural']),
    ('MECH', ['mechanical', ' mech ', 'machinist', 'fitter', 'welder', 'boiler']),
    ('EEE', ['electrical', ' eee ', 'electrician']),
    ('ECE', ['electronics', ' ece ', 'radio', 'telecommunication']),
    ('CSE', ['computer', ' cse ', ' it ', 'software', 'programmer', 'data entry']),
    ('CHEM', ['chemical', 'petrochem']),
    ('INST', ['instrumentation', 'instrument']),
]

GENERAL_ENGINEERING_CODE = 'GENERAL_ENGG'
GENERAL_ENGINEERING_KEYWORDS = [
    'engineer', ' je ', ' get ', 'technical officer', 'graduate engineer', 'junior engineer',
]


def categorize_notice_type(title: Optional[str]) -> str:
    """
    Classify a notice title into a NoticeType value.

    Returns:
        One of RESULT, EXAM_ADMIT_CARD, CALENDAR, APPRENTICESHIP,
        RECRUITMENT or GENERAL_INFO (the default)
    """
    if not title or not title.strip():
        return NoticeType.GENERAL_INFO.value
    lower = title.lower()
    for notice_type, keywords in NOTICE_TYPE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return notice_type.value
    return NoticeType.GENERAL_INFO.value


def infer_engineering_branches(title: Optional[str]) -> Optional[str]:
    """
    Infer engineering branch codes from a notice title.

    Branches are not exclusive: "Electrical & Mechanical Fitter" yields
    "MECH,EEE". A title with only a generic engineering keyword
    ("Junior Engineer Recruitment") yields "GENERAL_ENGG".

    Returns:
        Comma-separated branch codes in CIVIL, MECH, EEE, ECE, CSE, CHEM,
        INST order, or None when the title is not engineering-related
    """
    if not title or not title.strip():
        return None
    padded = f" {title.lower()} "

    branches = [
        code for code, keywords in BRANCH_KEYWORDS
        if any(keyword in padded for keyword in keywords)
    ]
    if not branches and any(keyword in padded for keyword in GENERAL_ENGINEERING_KEYWORDS):
        branches.append(GENERAL_ENGINEERING_CODE)

    return ",".join(branches) if branches else None


def is_engineering_related(title: Optional[str]) -> bool:
    return infer_engineering_branches(title) is not None
