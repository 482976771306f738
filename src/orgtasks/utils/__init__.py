#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Helper utilities for orgtasks."""
