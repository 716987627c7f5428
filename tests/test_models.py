"""Tests for request models and body parsing."""

import pytest

from platform_backend.errors import ValidationError
from platform_backend.models import (
    AdSubmission,
    ArticleApproval,
    ArticleStatus,
    ArticleSubmission,
    CommentSubmission,
    SupportSubmission,
    parse_payload,
)


class TestArticleSubmission:
    def test_defaults(self) -> None:
        article = parse_payload(ArticleSubmission, {"title": " T ", "category": "News", "content": "C"})

        assert article.title == "T"
        assert article.status is ArticleStatus.PENDING
        assert article.author == "Citizen Reporter"
        assert article.sub_headline == ""
        assert article.date is None

    def test_null_sub_headline_becomes_empty(self) -> None:
        article = parse_payload(
            ArticleSubmission, {"title": "T", "category": "News", "content": "C", "subHeadline": None}
        )
        assert article.sub_headline == ""

    def test_snake_case_names_also_accepted(self) -> None:
        article = parse_payload(
            ArticleSubmission, {"title": "T", "category": "News", "content": "C", "sub_headline": "S"}
        )
        assert article.sub_headline == "S"

    def test_missing_fields_listed_in_details(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            parse_payload(ArticleSubmission, {"title": "T"})

        error = excinfo.value
        assert error.status_code == 400
        assert error.message == "Title, category, and content are required"
        assert {d["field"] for d in error.details} == {"category", "content"}

    def test_null_required_field_counts_as_missing(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            parse_payload(ArticleSubmission, {"title": None, "category": "News", "content": "C"})
        assert excinfo.value.message == "Title, category, and content are required"


class TestArticleApproval:
    def test_empty_body(self) -> None:
        assert parse_payload(ArticleApproval, {}).is_breaking is False

    def test_null_flag(self) -> None:
        assert parse_payload(ArticleApproval, {"isBreaking": None}).is_breaking is False

    def test_flag(self) -> None:
        assert parse_payload(ArticleApproval, {"isBreaking": True}).is_breaking is True


class TestAdSubmission:
    def test_amount_accepts_numeric_string(self) -> None:
        ad = parse_payload(
            AdSubmission, {"clientName": "A", "email": "a@b.co", "plan": "p", "amount": "1200.50"}
        )
        assert ad.amount == 1200.5

    def test_non_numeric_amount(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            parse_payload(AdSubmission, {"clientName": "A", "email": "a@b.co", "plan": "p", "amount": "lots"})
        assert excinfo.value.message.startswith("Invalid field 'amount'")


class TestCommentSubmission:
    def test_article_id_coerced_from_string(self) -> None:
        comment = parse_payload(
            CommentSubmission, {"articleId": "12", "author": "R", "email": "r@x.io", "content": "Hi"}
        )
        assert comment.article_id == 12

    def test_bad_email(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            parse_payload(CommentSubmission, {"articleId": 1, "author": "R", "email": "r@", "content": "Hi"})
        assert excinfo.value.message == "Invalid field 'email': Invalid email address"


class TestSupportSubmission:
    def test_unknown_keys_ignored(self) -> None:
        message = parse_payload(
            SupportSubmission, {"name": "N", "email": "n@x.io", "message": "M", "status": "read"}
        )
        assert not hasattr(message, "status")
