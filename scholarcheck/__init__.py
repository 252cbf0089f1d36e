"""
Scholarship Eligibility Service

Checks student profiles against scholarship eligibility criteria and explains
each decision criterion by criterion.
"""

__version__ = "1.0.0"
__author__ = "Scholarship Platform Team"
__description__ = "Scholarship eligibility checking service"
