"""Models module.

This module provides data models and dataclasses for the application.
"""

from nrn_test_util.models.register_number import BiologicalSex, RegisterNumberDetails

__all__ = [
    "BiologicalSex",
    "RegisterNumberDetails",
]
