# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for concurrent writes to the records database.

Two sessions against one SQLite file stand in for two requests racing on
the same rows. No external services are required.
"""

from collections.abc import AsyncIterator
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.domains.enrollment.service import CourseEnrollmentService
from src.domains.grading.service import GradeService
from src.infrastructure.database.models import Base, CourseEnrollment, Grade, Student, Subject
from src.models.academic import CourseEnrollmentStatus, GradeStatus, GradeType, Semester

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def sessionmaker(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Create a file-backed SQLite schema shared by several sessions."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def student_id(sessionmaker: async_sessionmaker[AsyncSession]) -> str:
    """Persist a student and the CS101 subject."""
    async with sessionmaker() as session:
        student = Student(student_number="S2025001", first_name="Ada", last_name="Lovelace")
        session.add_all([student, Subject(code="CS101", title="Intro to Programming", credit_hours=3)])
        await session.commit()
        return student.id


@pytest_asyncio.fixture
async def graded_enrollment(
    sessionmaker: async_sessionmaker[AsyncSession],
    student_id: str,
) -> tuple[str, str]:
    """Persist a completed CS101 enrollment with a final C."""
    async with sessionmaker() as session:
        enrollment = CourseEnrollment(
            student_id=student_id,
            subject_code="CS101",
            academic_year=2025,
            semester=Semester.SPRING,
            status=CourseEnrollmentStatus.COMPLETED,
            enrollment_date=datetime(2025, 1, 15, tzinfo=timezone.utc),
            credit_hours=3,
        )
        session.add(enrollment)
        await session.flush()

        grade = Grade(
            course_enrollment_id=enrollment.id,
            grade_type=GradeType.FINAL,
            letter_grade="C",
            numeric_grade=Decimal("74"),
            grade_points=Decimal("2.0"),
            credit_hours=3,
            status=GradeStatus.ACTIVE,
            is_final=True,
            grade_date=datetime(2025, 5, 20, tzinfo=timezone.utc),
        )
        session.add(grade)
        await session.commit()
        return enrollment.id, grade.id


class TestConcurrentGradeCorrection:
    """Two corrections of the same grade."""

    @pytest.mark.asyncio
    async def test_stale_correction_leaves_one_active_final(self, sessionmaker, graded_enrollment):
        """Test the second of two racing corrections is rejected."""
        enrollment_id, grade_id = graded_enrollment

        async with sessionmaker() as first, sessionmaker() as second:
            # Both requests have read the grade while it was still active.
            await first.get(Grade, grade_id)
            stale = await second.get(Grade, grade_id)
            assert stale.status == GradeStatus.ACTIVE

            assert await GradeService(first).update_grade(grade_id, letter_grade="B") is True
            assert await GradeService(second).update_grade(grade_id, letter_grade="A") is False

        async with sessionmaker() as session:
            result = await session.execute(
                select(Grade).where(
                    Grade.course_enrollment_id == enrollment_id,
                    Grade.is_final.is_(True),
                    Grade.status == GradeStatus.ACTIVE,
                )
            )
            active = list(result.scalars().all())

        assert [grade.letter_grade for grade in active] == ["B"]
        assert active[0].replaced_grade_id == grade_id

    @pytest.mark.asyncio
    async def test_correction_bumps_version(self, sessionmaker, graded_enrollment):
        """Test superseding a grade increments its version."""
        _, grade_id = graded_enrollment

        async with sessionmaker() as session:
            assert await GradeService(session).update_grade(grade_id, letter_grade="B") is True

        async with sessionmaker() as session:
            grade = await session.get(Grade, grade_id)

        assert grade.status == GradeStatus.CHANGED
        assert grade.version == 2


class TestConcurrentEnrollment:
    """Two enrollments of the same student in the same subject."""

    @pytest.mark.asyncio
    async def test_racing_enrollment_is_rejected(self, sessionmaker, student_id):
        """Test the active-enrollment index rejects a duplicate that passed the read check."""
        async with sessionmaker() as first, sessionmaker() as second:
            assert await CourseEnrollmentService(first).enroll_student_in_course(student_id, "CS101")

            racing = CourseEnrollmentService(second)
            with patch.object(racing, "_get_active_enrollment", AsyncMock(return_value=None)):
                assert await racing.enroll_student_in_course(student_id, "CS101") is None

        async with sessionmaker() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(CourseEnrollment)
                .where(
                    CourseEnrollment.student_id == student_id,
                    CourseEnrollment.subject_code == "CS101",
                    CourseEnrollment.status == CourseEnrollmentStatus.ENROLLED,
                )
            )

        assert count == 1

    @pytest.mark.asyncio
    async def test_re_enrollment_after_drop_is_allowed(self, sessionmaker, student_id):
        """Test the index only covers ENROLLED rows."""
        async with sessionmaker() as session:
            service = CourseEnrollmentService(session)
            enrollment = await service.enroll_student_in_course(student_id, "CS101")
            assert await service.drop_student_from_course(enrollment.id, "Schedule conflict") is True

            assert await service.enroll_student_in_course(student_id, "CS101") is not None
