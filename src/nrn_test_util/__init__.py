"""NRN Test Utility.

Generation, validation, formatting and field extraction for Belgian national
register numbers.
"""

__version__ = "0.1.0"
