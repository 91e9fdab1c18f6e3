"""
Tests for notice type and engineering branch classification.
"""
import pytest

from core.job_categorizer import (
    categorize_notice_type,
    infer_engineering_branches,
    is_engineering_related,
)


class TestNoticeType:
    @pytest.mark.parametrize("title,expected", [
        ("SSC CGL 2025 Recruitment Notification", "RECRUITMENT"),
        ("Junior Engineer (Civil) Recruitment 2025", "RECRUITMENT"),
        ("Result of Combined Recruitment Exam 2024", "RESULT"),
        ("Final Merit List for Staff Nurse", "RESULT"),
        ("Admit Card for CHSL Tier 1", "EXAM_ADMIT_CARD"),
        ("Annual Exam Calendar 2025-26", "CALENDAR"),
        ("Trade Apprentice Engagement 2025", "APPRENTICESHIP"),
        ("Holiday list for 2025", "GENERAL_INFO"),
        ("", "GENERAL_INFO"),
        (None, "GENERAL_INFO"),
    ])
    def test_priority_order(self, title, expected):
        assert categorize_notice_type(title) == expected


class TestEngineeringBranches:
    @pytest.mark.parametrize("title,expected", [
        ("Junior Engineer (Civil) Recruitment 2025", "CIVIL"),
        ("Electrical & Mechanical Fitter posts", "MECH,EEE"),
        ("Data Entry Operator and Programmer", "CSE"),
        ("Graduate Engineer Trainee 2025", "GENERAL_ENGG"),
        ("Instrumentation and Chemical Officer", "CHEM,INST"),
        ("SSC CGL 2025 Recruitment Notification", None),
        ("Staff Nurse Vacancy", None),
        (None, None),
    ])
    def test_branches(self, title, expected):
        assert infer_engineering_branches(title) == expected

    def test_short_codes_match_whole_words_only(self):
        assert infer_engineering_branches("Exhibition of paintings") is None
        assert infer_engineering_branches("Vacancy for IT assistant") == "CSE"

    def test_is_engineering_related(self):
        assert is_engineering_related("Assistant Engineer (Electrical)")
        assert not is_engineering_related("Lower Division Clerk")
