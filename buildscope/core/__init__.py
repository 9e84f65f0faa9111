# SPDX-License-Identifier: MIT
"""Core scope store, property transfer and configuration registry."""
