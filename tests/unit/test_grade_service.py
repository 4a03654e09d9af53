# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the grade ledger service."""

from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm.exc import StaleDataError

from src.domains.enrollment.exceptions import EnrollmentNotFoundError
from src.domains.grading.exceptions import GradeNotFoundError, InvalidGradeError
from src.domains.grading.service import GradeService
from src.infrastructure.database.models import Grade
from src.models.academic import CourseEnrollmentStatus, GradeStatus, GradeType


@pytest.fixture
def grade_service(mock_db):
    """Create grade service with mock database."""
    return GradeService(db=mock_db)


class TestRecordGrade:
    """Tests for recording grades."""

    @pytest.mark.asyncio
    async def test_numeric_grade_derives_letter(
        self, grade_service, mock_db, make_enrollment, make_scalar_result
    ):
        """Test 87.5 is recorded as B+ worth 3.3 points."""
        enrollment = make_enrollment(letter=None)
        mock_db.execute.return_value = make_scalar_result(enrollment)

        grade = await grade_service.record_grade(
            enrollment.id, GradeType.MIDTERM, numeric_grade=Decimal("87.5")
        )

        assert grade.letter_grade == "B+"
        assert grade.grade_points == Decimal("3.3")
        assert grade.numeric_grade == Decimal("87.5")
        assert grade.is_final is False
        assert grade.credit_hours == enrollment.credit_hours
        assert enrollment.status == CourseEnrollmentStatus.ENROLLED
        mock_db.add.assert_called_once_with(grade)
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_letter_grade_derives_numeric(
        self, grade_service, mock_db, make_enrollment, make_scalar_result
    ):
        """Test a B+ without a score stores the representative 87."""
        enrollment = make_enrollment(letter=None)
        mock_db.execute.return_value = make_scalar_result(enrollment)

        grade = await grade_service.record_grade(enrollment.id, GradeType.QUIZ, letter_grade="B+")

        assert grade.numeric_grade == Decimal("87")
        assert grade.grade_points == Decimal("3.3")

    @pytest.mark.asyncio
    async def test_final_grade_completes_enrollment(
        self, grade_service, mock_db, make_enrollment, make_scalar_result
    ):
        """Test a final grade moves an enrolled course to completed."""
        enrollment = make_enrollment(letter=None)
        mock_db.execute.return_value = make_scalar_result(enrollment)

        grade = await grade_service.record_grade(enrollment.id, GradeType.FINAL, letter_grade="A")

        assert grade.is_final is True
        assert enrollment.status == CourseEnrollmentStatus.COMPLETED
        assert enrollment.completion_date is not None

    @pytest.mark.asyncio
    async def test_second_final_supersedes_first(
        self, grade_service, mock_db, make_enrollment, make_scalar_result
    ):
        """Test only one final grade stays active."""
        enrollment = make_enrollment(letter="C")
        previous = enrollment.grades[0]
        mock_db.execute.return_value = make_scalar_result(enrollment)

        grade = await grade_service.record_grade(enrollment.id, GradeType.FINAL, letter_grade="B")

        assert previous.status == GradeStatus.CHANGED
        assert grade.status == GradeStatus.ACTIVE
        assert grade.replaced_grade_id == previous.id

    @pytest.mark.asyncio
    async def test_neither_grade_supplied(self, grade_service, mock_db, make_enrollment, make_scalar_result):
        """Test recording requires a letter or a score."""
        mock_db.execute.return_value = make_scalar_result(make_enrollment(letter=None))

        with pytest.raises(InvalidGradeError):
            await grade_service.record_grade("enrollment", GradeType.FINAL)

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_out_of_range_score(self, grade_service, mock_db, make_enrollment, make_scalar_result):
        """Test scores above 100 are rejected."""
        mock_db.execute.return_value = make_scalar_result(make_enrollment(letter=None))

        with pytest.raises(InvalidGradeError):
            await grade_service.record_grade("enrollment", GradeType.EXAM, numeric_grade=101)

    @pytest.mark.asyncio
    async def test_unknown_enrollment(self, grade_service, mock_db, make_scalar_result):
        """Test an unknown enrollment raises."""
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(EnrollmentNotFoundError):
            await grade_service.record_grade("missing", GradeType.FINAL, letter_grade="A")


class TestUpdateGrade:
    """Tests for correcting grades."""

    @pytest.mark.asyncio
    async def test_correction_appends_row(
        self, grade_service, mock_db, make_grade, make_enrollment, make_scalar_result
    ):
        """Test a correction keeps the old row as history."""
        original = make_grade("C", course_enrollment_id="enrollment-1", graded_by="prof")
        enrollment = make_enrollment(id="enrollment-1", grades=[original])
        mock_db.execute.side_effect = [
            make_scalar_result(original),
            make_scalar_result(enrollment),
        ]

        result = await grade_service.update_grade(original.id, letter_grade="B+", comments="Regrade")

        assert result is True
        assert original.status == GradeStatus.CHANGED
        assert original.letter_grade == "C"

        corrected = mock_db.add.call_args.args[0]
        assert isinstance(corrected, Grade)
        assert corrected.status == GradeStatus.ACTIVE
        assert corrected.letter_grade == "B+"
        assert corrected.grade_points == Decimal("3.3")
        assert corrected.replaced_grade_id == original.id
        assert corrected.course_enrollment_id == "enrollment-1"
        assert corrected.graded_by == "prof"
        assert corrected.comments == "Regrade"
        mock_db.refresh.assert_awaited_once_with(original)
        mock_db.commit.assert_called_once()

        lock_query = mock_db.execute.call_args_list[1].args[0]
        assert "FOR UPDATE" in str(lock_query.compile(dialect=postgresql.dialect()))

    @pytest.mark.asyncio
    async def test_concurrent_correction_returns_false(
        self, grade_service, mock_db, make_grade, make_enrollment, make_scalar_result
    ):
        """Test a correction racing another one is rolled back."""
        original = make_grade("C")
        mock_db.execute.side_effect = [
            make_scalar_result(original),
            make_scalar_result(make_enrollment(grades=[original])),
        ]
        mock_db.commit.side_effect = StaleDataError("UPDATE statement on table 'grades' matched 0 rows")

        assert await grade_service.update_grade(original.id, letter_grade="A") is False
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_superseded_grade_returns_false(
        self, grade_service, mock_db, make_grade, make_enrollment, make_scalar_result
    ):
        """Test a changed row cannot be corrected again."""
        original = make_grade("C", status=GradeStatus.CHANGED)
        mock_db.execute.side_effect = [
            make_scalar_result(original),
            make_scalar_result(make_enrollment(grades=[original])),
        ]

        assert await grade_service.update_grade(original.id, letter_grade="A") is False
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_grade(self, grade_service, mock_db, make_scalar_result):
        """Test an unknown grade raises."""
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(GradeNotFoundError):
            await grade_service.update_grade("missing", letter_grade="A")
