# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Honors and awards registry.

Entries are append-only. Deactivation hides an entry from transcripts and
listings without deleting it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import StudentNotFoundError
from src.domains.honors.exceptions import (
    AwardNotFoundError,
    HonorNotFoundError,
    InvalidHonorError,
)
from src.infrastructure.database.models import AcademicHonor, Award, Student
from src.infrastructure.database.models.student import GPA_MAX, GPA_MIN
from src.models.academic import AwardType, HonorType, Semester
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"


class HonorsService:
    """Service recording academic honors and awards.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize honors service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def award_academic_honor(
        self,
        student_id: str,
        honor_type: HonorType,
        title: str,
        academic_year: int | None = None,
        semester: Semester | None = None,
        required_gpa: Decimal | None = None,
        description: str | None = None,
        appears_on_transcript: bool = True,
        award_date: datetime | None = None,
    ) -> AcademicHonor:
        """Record an honor with the student's current cumulative GPA.

        Args:
            student_id: Student identifier.
            honor_type: Kind of honor.
            title: Title printed on the transcript.
            academic_year: Year the honor applies to.
            semester: Term the honor applies to.
            required_gpa: Minimum GPA for the honor, if any.
            description: Optional description.
            appears_on_transcript: Whether transcripts list the honor.
            award_date: When the honor was granted; defaults to now.

        Returns:
            The recorded honor.

        Raises:
            StudentNotFoundError: If the student does not exist.
            InvalidHonorError: If ``required_gpa`` is outside [0, 4] or not met.
        """
        if required_gpa is not None and not GPA_MIN <= required_gpa <= GPA_MAX:
            raise InvalidHonorError(
                f"Required GPA must be between {GPA_MIN} and {GPA_MAX}",
                {"required_gpa": str(required_gpa)},
            )

        student = await self._get_student(student_id)
        student_gpa = student.cumulative_gpa

        if required_gpa is not None and (student_gpa is None or student_gpa < required_gpa):
            raise InvalidHonorError(
                f"Student GPA does not meet the {required_gpa} required for {title}",
                {"student_id": student_id, "student_gpa": str(student_gpa)},
            )

        honor = AcademicHonor(
            student_id=student_id,
            honor_type=honor_type,
            title=title,
            description=description,
            academic_year=academic_year,
            semester=semester,
            award_date=award_date or utc_now(),
            required_gpa=required_gpa,
            student_gpa=student_gpa,
            appears_on_transcript=appears_on_transcript,
            is_active=True,
        )
        self.db.add(honor)
        await self.db.commit()
        await self.db.refresh(honor)

        logger.info(
            "Awarded honor: student=%s, type=%s, gpa=%s",
            student_id,
            honor_type.value,
            student_gpa,
        )
        return honor

    async def give_award(
        self,
        student_id: str,
        award_type: AwardType,
        name: str,
        monetary_value: Decimal | None = None,
        currency: str = DEFAULT_CURRENCY,
        awarding_organization: str | None = None,
        academic_year: int | None = None,
        description: str | None = None,
        appears_on_transcript: bool = True,
        award_date: datetime | None = None,
    ) -> Award:
        """Record an award or scholarship.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        await self._get_student(student_id)

        award = Award(
            student_id=student_id,
            award_type=award_type,
            name=name,
            description=description,
            monetary_value=monetary_value,
            currency=currency.upper(),
            award_date=award_date or utc_now(),
            academic_year=academic_year,
            awarding_organization=awarding_organization,
            appears_on_transcript=appears_on_transcript,
            is_active=True,
        )
        self.db.add(award)
        await self.db.commit()
        await self.db.refresh(award)

        logger.info("Gave award: student=%s, type=%s, name=%s", student_id, award_type.value, name)
        return award

    async def list_student_honors(
        self,
        student_id: str,
        include_inactive: bool = False,
    ) -> list[AcademicHonor]:
        """Honors of a student, most recent first."""
        query = select(AcademicHonor).where(AcademicHonor.student_id == student_id)
        if not include_inactive:
            query = query.where(AcademicHonor.is_active.is_(True))
        result = await self.db.execute(query.order_by(AcademicHonor.award_date.desc()))
        return list(result.scalars().all())

    async def list_student_awards(
        self,
        student_id: str,
        include_inactive: bool = False,
    ) -> list[Award]:
        """Awards of a student, most recent first."""
        query = select(Award).where(Award.student_id == student_id)
        if not include_inactive:
            query = query.where(Award.is_active.is_(True))
        result = await self.db.execute(query.order_by(Award.award_date.desc()))
        return list(result.scalars().all())

    async def deactivate_honor(self, honor_id: str) -> AcademicHonor:
        """Hide an honor.

        Raises:
            HonorNotFoundError: If the honor does not exist.
        """
        result = await self.db.execute(select(AcademicHonor).where(AcademicHonor.id == honor_id))
        honor = result.scalar_one_or_none()
        if honor is None:
            raise HonorNotFoundError(honor_id)

        honor.is_active = False
        await self.db.commit()
        logger.info("Deactivated honor: %s", honor_id)
        return honor

    async def deactivate_award(self, award_id: str) -> Award:
        """Hide an award.

        Raises:
            AwardNotFoundError: If the award does not exist.
        """
        result = await self.db.execute(select(Award).where(Award.id == award_id))
        award = result.scalar_one_or_none()
        if award is None:
            raise AwardNotFoundError(award_id)

        award.is_active = False
        await self.db.commit()
        logger.info("Deactivated award: %s", award_id)
        return award

    async def _get_student(self, student_id: str) -> Student:
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        student = result.scalar_one_or_none()
        if student is None:
            raise StudentNotFoundError(student_id)
        return student
