# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Honors and awards domain package."""

from src.domains.honors.exceptions import (
    AwardNotFoundError,
    HonorNotFoundError,
    HonorsServiceError,
    InvalidHonorError,
)
from src.domains.honors.service import HonorsService

__all__ = [
    "HonorsService",
    "HonorsServiceError",
    "InvalidHonorError",
    "HonorNotFoundError",
    "AwardNotFoundError",
]
