"""
DevConnect Backend — Request Schema Tests
============================================

What we test:
    ✅ Skills accepted as a list or a comma-separated string
    ✅ Blank required fields rejected with readable messages
    ✅ Blank optional fields treated as "not provided"
    ✅ Experience/education accept the `from` key
"""

from datetime import date

import pytest
from pydantic import ValidationError

from devconnect.schemas.post import CommentCreate, PostCreate
from devconnect.schemas.profile import EducationCreate, ExperienceCreate, ProfileUpsert


class TestProfileUpsert:

    def test_skills_from_comma_string(self):
        data = ProfileUpsert(status="Developer", skills=" python,fastapi , ,sql ")
        assert data.skills == ["python", "fastapi", "sql"]

    def test_skills_from_list(self):
        data = ProfileUpsert(status="Developer", skills=["  go ", "", "rust"])
        assert data.skills == ["go", "rust"]

    def test_blank_skills_rejected(self):
        with pytest.raises(ValidationError, match="Skills is required"):
            ProfileUpsert(status="Developer", skills=" , ")

    def test_blank_status_rejected(self):
        with pytest.raises(ValidationError, match="Status is required"):
            ProfileUpsert(status="   ", skills="python")

    def test_only_provided_fields_are_written(self):
        data = ProfileUpsert(
            status="Developer", skills="python", company="  ", twitter="https://twitter.com/ada"
        )
        assert data.profile_fields() == {"status": "Developer", "skills": ["python"]}
        assert data.social_fields() == {"twitter": "https://twitter.com/ada"}


class TestDatedEntries:

    def test_experience_accepts_from_key(self):
        entry = ExperienceCreate.model_validate(
            {"title": "Engineer", "company": "Acme", "from": "2020-01-15"}
        )
        assert entry.from_ == date(2020, 1, 15)
        assert entry.current is False
        assert entry.model_dump(mode="json", by_alias=True)["from"] == "2020-01-15"

    def test_experience_requires_title(self):
        with pytest.raises(ValidationError, match="Title is required"):
            ExperienceCreate.model_validate({"title": " ", "company": "Acme", "from": "2020-01-01"})

    def test_education_blank_field_of_study(self):
        with pytest.raises(ValidationError, match="Field of study is required"):
            EducationCreate.model_validate(
                {"school": "MIT", "degree": "BSc", "fieldofstudy": "", "from": "2010-09-01"}
            )

    def test_invalid_from_date(self):
        with pytest.raises(ValidationError):
            ExperienceCreate.model_validate({"title": "Dev", "company": "Acme", "from": "yesterday"})


class TestPostText:

    @pytest.mark.parametrize("schema", [PostCreate, CommentCreate])
    def test_whitespace_text_rejected(self, schema):
        with pytest.raises(ValidationError, match="Text is required"):
            schema(text=" \n\t ")

    def test_text_kept_verbatim(self):
        assert PostCreate(text="  hello  ").text == "  hello  "
