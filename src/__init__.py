"""Academic Records Core.

Academic-record subsystem of an institutional records platform: enrollment
lifecycle, grade ledger and GPA calculation, prerequisite validation,
degree auditing, transcripts, and honors.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "0.1.0"
