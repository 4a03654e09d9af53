# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for academic records.

Each domain module provides services that read and write the academic
record through one async session.

Domains:
    enrollment: Student lifecycle and course enrollment state machines.
    grading: Grade ledger and GPA calculation.
    prerequisite: Course prerequisite validation.
    degree_audit: Degree progress, graduation eligibility and what-if analysis.
    transcript: Official and unofficial transcripts.
    honors: Academic honors and awards.
"""
