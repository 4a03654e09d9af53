# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transcript domain package.

Official and unofficial transcripts and record summaries.
"""

from src.domains.transcript.schemas import (
    TranscriptAward,
    TranscriptCourseLine,
    TranscriptHonor,
    TranscriptResponse,
    TranscriptSummary,
)
from src.domains.transcript.service import TranscriptService, build_course_line

__all__ = [
    "TranscriptService",
    "TranscriptAward",
    "TranscriptCourseLine",
    "TranscriptHonor",
    "TranscriptResponse",
    "TranscriptSummary",
    "build_course_line",
]
