"""crossnegatives.

Cross-campaign negative keyword propagation for Google Ads, plus the
currency and range helpers used by the Performance Decomposition workbook.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
