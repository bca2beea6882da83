"""
tests/test_csv.py — Unit tests for CSV lead import and results export.
"""

import pytest

from app.ingestion.csv_io import (
    EXPORT_COLUMNS,
    CSVValidationError,
    parse_leads_csv,
    results_to_csv,
    split_valid_rows,
    validate_lead_row,
)


GOOD_CSV = (
    b"name,role,company,industry,location,linkedin_bio\n"
    b"Ava Patel,Head of Growth,FlowMetrics,B2B SaaS,San Francisco,Growth lead\n"
    b"Ben Ortiz,Developer,ShopCo,Retail,Austin,\n"
)


class TestParseLeadsCsv:
    def test_parses_rows(self):
        rows = parse_leads_csv(GOOD_CSV)
        assert len(rows) == 2
        assert rows[0]["name"] == "Ava Patel"
        assert rows[0]["linkedin_bio"] == "Growth lead"

    def test_empty_cells_become_empty_strings(self):
        rows = parse_leads_csv(GOOD_CSV)
        assert rows[1]["linkedin_bio"] == ""

    def test_headers_are_case_insensitive_and_values_trimmed(self):
        content = (
            b" Name ,ROLE,Company,Industry,Location,LinkedIn_Bio\n"
            b"  Ava Patel ,  CEO ,Acme,SaaS,NYC,  hi  \n"
        )
        rows = parse_leads_csv(content)
        assert rows == [{
            "name": "Ava Patel", "role": "CEO", "company": "Acme",
            "industry": "SaaS", "location": "NYC", "linkedin_bio": "hi",
        }]

    def test_quoted_commas(self):
        content = (
            b"name,role,company,industry,location,linkedin_bio\n"
            b'Ava,"VP, Sales",Acme,SaaS,NYC,"Builds teams, ships fast"\n'
        )
        rows = parse_leads_csv(content)
        assert rows[0]["role"] == "VP, Sales"

    def test_extra_columns_are_dropped(self):
        content = (
            b"name,role,company,industry,location,linkedin_bio,email\n"
            b"Ava,CEO,Acme,SaaS,NYC,,ava@acme.io\n"
        )
        assert "email" not in parse_leads_csv(content)[0]

    def test_missing_columns(self):
        content = b"name,role,company\nAva,CEO,Acme\n"
        with pytest.raises(CSVValidationError, match="industry, location, linkedin_bio"):
            parse_leads_csv(content)

    @pytest.mark.parametrize("content", [b"", b"   \n", b"name,role,company,industry,location,linkedin_bio\n"])
    def test_empty_file(self, content):
        with pytest.raises(CSVValidationError, match="empty"):
            parse_leads_csv(content)


class TestValidation:
    def test_valid_row(self):
        row = {"name": "A", "role": "B", "company": "C", "industry": "D", "location": "E", "linkedin_bio": ""}
        assert validate_lead_row(row) is True

    @pytest.mark.parametrize("field", ["name", "role", "company", "industry", "location"])
    def test_blank_required_field(self, field):
        row = {"name": "A", "role": "B", "company": "C", "industry": "D", "location": "E"}
        row[field] = "  "
        assert validate_lead_row(row) is False

    def test_split_reports_csv_line_numbers(self):
        rows = [
            {"name": "A", "role": "B", "company": "C", "industry": "D", "location": "E"},
            {"name": "", "role": "B", "company": "C", "industry": "D", "location": "E"},
        ]
        valid, invalid = split_valid_rows(rows)
        assert len(valid) == 1
        assert invalid == [{"line": 3, "lead": rows[1]}]


class TestResultsToCsv:
    def test_header_and_rows(self):
        text = results_to_csv([{
            "name": "Ava", "role": "CEO", "company": "Acme", "industry": "SaaS",
            "location": "NYC", "intent": "High", "score": 90,
            "reasoning": "Strong fit, decision maker.", "rule_score": 40,
        }])
        lines = text.strip().splitlines()
        assert lines[0] == ",".join(EXPORT_COLUMNS)
        assert lines[1] == 'Ava,CEO,Acme,SaaS,NYC,High,90,"Strong fit, decision maker."'

    def test_empty(self):
        assert results_to_csv([]) == ""
