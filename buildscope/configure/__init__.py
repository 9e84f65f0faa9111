# SPDX-License-Identifier: MIT
"""Configure-phase context."""
